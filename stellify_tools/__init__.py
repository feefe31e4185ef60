# =============================================================================
# stellify_tools/__init__.py
# =============================================================================
# The MCP layer: the tool catalogue, the dispatcher that runs catalogue
# entries against the Stellify client, and the FastMCP server that exposes
# them over stdio.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP directly (that's stellify_core/client.py)
#   - They do NOT keep state between calls
#   - They do NOT retry; the calling agent decides what to do with a failure
# =============================================================================
