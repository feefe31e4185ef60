# =============================================================================
# main.py  -  Entry Point for the Stellify MCP Server
# =============================================================================
#
# HOW TO RUN:
#   STELLIFY_API_TOKEN=... uv run python main.py
#   (or, once installed:  stellify-mcp)
#
# WHAT HAPPENS:
#   1. Loads a .env file if one exists (STELLIFY_API_TOKEN, STELLIFY_API_URL)
#   2. Reads Settings; a missing token ends the process with exit code 1
#      before anything else is built
#   3. Creates the Stellify client, the tool catalogue and the dispatcher
#   4. Attaches them to a FastMCP server and serves MCP over stdio until the
#      client closes the channel
#
# CONNECTING AN MCP CLIENT:
#   Point the client at this script with stdio transport, e.g.
#     {"command": "uv", "args": ["run", "python", "/path/to/main.py"],
#      "env": {"STELLIFY_API_TOKEN": "..."}}
# =============================================================================

import asyncio
import logging
import sys

from dotenv import load_dotenv

from stellify_core.client import StellifyClient
from stellify_core.config import Settings
from stellify_core.errors import ConfigError
from stellify_tools.catalogue import build_catalogue
from stellify_tools.dispatcher import Dispatcher
from stellify_tools.logs import configure_logging
from stellify_tools.mcp_server import build_server

logger = logging.getLogger("stellify_mcp")


async def serve(settings: Settings) -> None:
    """Wire client → catalogue → dispatcher → server and run until EOF."""
    async with StellifyClient(settings.api_url, settings.api_token) as client:
        catalogue = build_catalogue()
        dispatcher = Dispatcher(catalogue, client)
        server = build_server(catalogue, dispatcher)

        logger.info(f"Stellify MCP server running on stdio ({len(catalogue)} tools, API {settings.api_url})")
        await server.run_async(transport="stdio")


def main() -> None:
    # Must happen BEFORE Settings.from_env() so .env values are visible.
    load_dotenv()

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
