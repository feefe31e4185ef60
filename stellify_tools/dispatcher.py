# =============================================================================
# stellify_tools/dispatcher.py  -  Tool Dispatch
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. dispatch(name, arguments) is called by the MCP layer (or a test)
#   2. the argument bag must exist, and the name must be in the catalogue
#   3. the bag is validated against the tool's pydantic contract
#   4. exactly ONE client call is made
#   5. the decoded payload (or the error) is wrapped in a ToolResult
#
# THE GUARANTEE:
#   dispatch() always returns exactly one ToolResult.  Unknown tools, bad
#   arguments, HTTP failures and malformed responses all become failure
#   envelopes; none of them escape and take the server down.
# =============================================================================

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from stellify_core.client import StellifyClient
from stellify_core.errors import DecodeError, RemoteAPIError
from stellify_core.models import ToolResult
from stellify_tools.catalogue import Catalogue
from stellify_tools.logs import log_request, log_result, log_status

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes (name, arguments) to the matching catalogue entry."""

    def __init__(self, catalogue: Catalogue, client: StellifyClient):
        self.catalogue = catalogue
        self.client = client

    async def dispatch(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        log_request(name, arguments)
        return log_result(name, await self._dispatch(name, arguments))

    async def _dispatch(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        if arguments is None:
            return ToolResult.fail("Arguments are required")
        if not isinstance(arguments, Mapping):
            return ToolResult.fail(
                "Arguments must be an object",
                detail={"received": type(arguments).__name__},
            )

        spec = self.catalogue.get(name)
        if spec is None:
            log_status(f"No tool named {name!r}")
            return ToolResult.fail(
                f"Unknown tool: {name}",
                detail={"available_tools": list(self.catalogue.names())},
            )

        try:
            args = spec.arguments.model_validate(dict(arguments))
        except ValidationError as exc:
            log_status(f"{exc.error_count()} invalid argument(s)")
            return ToolResult.fail(
                f"Invalid arguments for {name}",
                detail=exc.errors(include_url=False, include_context=False),
            )

        try:
            payload = await spec.call(self.client, args)
            message = spec.summarize(args, payload)
        except RemoteAPIError as exc:
            status = exc.status_code if exc.status_code is not None else "no response"
            log_status(f"Stellify API error ({status}): {exc.message}")
            return ToolResult.fail(exc.message, exc.detail)
        except DecodeError as exc:
            log_status(f"Unexpected response shape: {exc.message}")
            return ToolResult.fail(exc.message, exc.body)
        except Exception as exc:
            logger.exception("Tool %s failed unexpectedly", name)
            return ToolResult.fail(str(exc) or exc.__class__.__name__)

        return ToolResult.ok(message, payload)
