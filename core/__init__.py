# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL logic for the GitHub triage tool server.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any MCP transport code.
#   The gateway, the schemas, the handlers and the upstream clients are
#   plain Python objects you can build in a REPL with fake collaborators.
#
#   The tools/ layer wraps the gateway in MCP; the core is the engine.
# =============================================================================
