# =============================================================================
# stellify_core/__init__.py
# =============================================================================
# Everything needed to talk to the Stellify API: configuration, the HTTP
# client, argument contracts, response decoders and the envelope model.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP layer lives in
#   stellify_tools/ and depends on this package, never the other way round.
#   Every module here can be exercised in a plain test with a mocked HTTP
#   transport.
# =============================================================================
