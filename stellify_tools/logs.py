# =============================================================================
# stellify_tools/logs.py  -  Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT
# (stdin/stdout is the MCP transport).  A log line on stdout would corrupt
# the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + arguments)
#     - YELLOW for intermediate status messages
#     - GREEN for successful envelopes
#     - RED for failure envelopes
# =============================================================================

import json
import logging
import sys
from typing import Any, Mapping

from stellify_core.models import ToolResult

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("stellify_mcp")

# Long code bodies and HTML snippets are cut down in request logs.
_MAX_VALUE_CHARS = 120


def configure_logging(level: str | int = "INFO") -> None:
    """Route all logging to stderr in the "[MCP]" format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO; keep that for DEBUG runs only.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level in ("DEBUG", logging.DEBUG) else logging.WARNING)


def _short(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_CHARS:
        text = text[: _MAX_VALUE_CHARS - 3] + "..."
    return text


def log_request(tool_name: str, arguments: Mapping[str, Any] | None) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    if arguments is None:
        param_str = "<no arguments>"
    elif not isinstance(arguments, Mapping):
        param_str = _short(arguments)
    else:
        param_str = ", ".join(f"{k}={_short(v)}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_result(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the envelope as compact JSON (GREEN / RED), then return it."""
    color = _GREEN if result.success else _RED
    compact = json.dumps(result.to_dict(), separators=(",", ":"), default=str)
    if len(compact) > 2000:
        compact = compact[:1997] + "..."
    logger.info(f"{color}  ← {tool_name} response: {compact}{_RESET}")
    return result
