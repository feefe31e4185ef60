# =============================================================================
# stellify_core/models.py  -  Data Models at the Protocol Boundary
# =============================================================================
#
# Two nouns cross the MCP boundary:
#
#   ToolDescriptor  what the caller sees in "list tools"
#   ToolResult      the envelope every "call tool" produces, success or not
#
# Remote entities (files, methods, elements, modules...) are NOT modelled
# here.  The adapter only carries their UUIDs and payloads through; the
# Stellify API owns their shape.
# =============================================================================

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _freeze(value: Any) -> Any:
    """Read-only copy of a JSON value: dicts become mapping proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


# -----------------------------------------------------------------------------
# ToolDescriptor - one catalogue entry as advertised to the caller
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON-schema input contract of one tool.

    The schema is stored read-only; to_dict() hands out a fresh plain copy.
    """

    name: str
    description: str
    input_schema: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "input_schema", _freeze(self.input_schema))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": _thaw(self.input_schema),
        }


# -----------------------------------------------------------------------------
# ToolResult - the uniform envelope
# -----------------------------------------------------------------------------
# Serialized shapes:
#
#   {"success": true,  "message": "Created file \"Widget\" (abc-123)", "data": {...}}
#   {"success": false, "error": "Request failed", "details": {...}}
#
# "details" is omitted entirely when there is nothing to report.
# -----------------------------------------------------------------------------
@dataclass
class ToolResult:
    """Outcome of exactly one tool invocation."""

    success: bool
    message: str = ""
    payload: Any = None
    error: str | None = None
    detail: Any = None

    @classmethod
    def ok(cls, message: str, payload: Any) -> "ToolResult":
        return cls(success=True, message=message, payload=payload)

    @classmethod
    def fail(cls, error: str, detail: Any = None) -> "ToolResult":
        return cls(success=False, error=error, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "message": self.message, "data": self.payload}
        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.detail is not None:
            body["details"] = self.detail
        return body

    def to_text(self) -> str:
        """Pretty JSON, the form written back onto the channel."""
        return json.dumps(self.to_dict(), indent=2, default=str)
