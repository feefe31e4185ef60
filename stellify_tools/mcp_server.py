# =============================================================================
# stellify_tools/mcp_server.py  -  FastMCP Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Attaches a Catalogue + Dispatcher to a FastMCP server instance.
#
# HOW IT WORKS (the flow):
#   1. The MCP client asks for "list tools" → FastMCP returns one entry per
#      catalogue descriptor, schema and all, exactly as declared
#   2. The client calls a tool by name (e.g. "create_file")
#   3. FastMCP routes the call to the matching CatalogueTool below
#   4. CatalogueTool.run() hands the raw argument bag to the dispatcher
#   5. The envelope comes back as a single JSON text block
#
# FAILURES:
#   A failure envelope is raised as a ToolError whose message IS the envelope
#   text.  FastMCP sends it back as ordinary text content with isError set,
#   so the caller gets the same parseable JSON either way.
#
#   Names missing from the catalogue are caught by CatalogueMiddleware before
#   FastMCP's own lookup, which would otherwise answer with plain text.
#
# WHY NOT @mcp.tool() DECORATORS?
#   The decorator derives a schema from a Python signature.  Here the schema
#   comes from the catalogue's argument models, and validation happens in
#   the dispatcher so a bad call still produces an envelope.  So each
#   catalogue entry is registered as a Tool instance carrying the declared
#   schema.
# =============================================================================

from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from pydantic import Field

from stellify_core.models import ToolResult
from stellify_tools.catalogue import Catalogue
from stellify_tools.dispatcher import Dispatcher

SERVER_NAME = "stellify-mcp"


def _to_mcp(result: ToolResult) -> MCPToolResult:
    if not result.success:
        raise ToolError(result.to_text())
    return MCPToolResult(content=result.to_text())


class CatalogueTool(Tool):
    """A FastMCP tool whose every call is forwarded to the dispatcher."""

    dispatcher: Any = Field(exclude=True, repr=False)

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        return _to_mcp(await self.dispatcher.dispatch(self.name, arguments))


class CatalogueMiddleware(Middleware):
    """Answers calls to unknown tools with a dispatcher envelope."""

    def __init__(self, catalogue: Catalogue, dispatcher: Dispatcher):
        self.catalogue = catalogue
        self.dispatcher = dispatcher

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if name in self.catalogue:
            return await call_next(context)
        return _to_mcp(await self.dispatcher.dispatch(name, context.message.arguments or {}))


def build_server(catalogue: Catalogue, dispatcher: Dispatcher, name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server exposing every tool in `catalogue`.

    Both arguments are constructed by the caller (main.py, or a test) so
    several independent servers can coexist in one process.
    """
    mcp = FastMCP(name, middleware=[CatalogueMiddleware(catalogue, dispatcher)])
    for descriptor in catalogue.descriptors():
        mcp.add_tool(
            CatalogueTool(
                name=descriptor.name,
                description=descriptor.description,
                parameters=descriptor.to_dict()["inputSchema"],
                dispatcher=dispatcher,
            )
        )
    return mcp
