# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and the core gateway.
#   Each tool here:
#     1. Receives arguments from an MCP client
#     2. Forwards them to core.gateway.ToolGateway.dispatch()
#     3. Returns the result text, or raises ToolError for failures
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate bounds (the gateway's schemas do)
#   - They do NOT talk to GitHub or Gemini (core/ does)
# =============================================================================
