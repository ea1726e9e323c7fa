# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes every tool in the core catalog over MCP.  Each MCP tool is a
#   thin wrapper: it forwards the RAW call arguments to the ToolGateway,
#   logs the exchange, and turns a failure envelope into an MCP error result.
#
# HOW IT WORKS (the flow):
#   1. An agent or inspector calls a tool by name via MCP (e.g. "close_issue")
#   2. FastMCP routes the call to the matching GatewayTool below
#   3. GatewayTool.run() hands the arguments, untouched, to gateway.dispatch()
#   4. The gateway validates, runs the handler, returns a ToolResult
#   5. Success → the result text; failure → ToolError (isError: true)
#
# TOOL CONTRACT:
#   Tool names, titles, descriptions and the advertised inputSchema all come
#   from core/catalog.py (ToolDefinition.input_schema()).  There are no
#   Python signatures here for FastMCP to coerce: `true` or `"7"` for an
#   integer reaches the gateway as-is and is rejected there.
#
# RUNNING THIS SERVER:
#   python main.py          (loads .env, then serves over stdio)
# =============================================================================

import json
import logging
import sys
from typing import Any

import anyio
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import ConfigDict

from core.gateway import ToolDefinition, ToolGateway


# =============================================================================
# Logging Setup
# =============================================================================
# Log to STDERR: stdout is the MCP transport, and any stray byte there
# corrupts the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response payloads
#     - YELLOW for status / failures
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status / failures
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

SERVER_NAME = "github-triage-mcp"


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the tool response compactly in GREEN, then return it."""
    try:
        compact = json.dumps(json.loads(text), separators=(',', ':'))
    except ValueError:
        compact = text
    logging.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return text


class GatewayTool(Tool):
    """An MCP tool whose schema and behavior come from one ToolDefinition."""

    gateway: ToolGateway

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_definition(cls, gateway: ToolGateway, definition: ToolDefinition) -> "GatewayTool":
        return cls(
            gateway=gateway,
            name=definition.name,
            title=definition.title,
            description=definition.description,
            parameters=definition.input_schema(),
            annotations=ToolAnnotations(
                title=definition.title,
                readOnlyHint=definition.read_only,
                idempotentHint=definition.idempotent,
                openWorldHint=True,
            ),
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        _log_request(self.name, arguments)
        # GitHub and Gemini clients are blocking; keep them off the event loop.
        result = await anyio.to_thread.run_sync(self.gateway.dispatch, self.name, arguments)
        if result.is_error:
            _log_status(f"{self.name} failed: {result.text}")
            raise ToolError(result.text)
        text = _log_response(self.name, result.text)
        return MCPToolResult(content=[TextContent(type="text", text=text)])


def create_server(gateway: ToolGateway, name: str = SERVER_NAME) -> FastMCP:
    """Build a FastMCP server with one GatewayTool per catalog entry."""
    mcp = FastMCP(name)
    for definition in gateway.definitions():
        mcp.add_tool(GatewayTool.from_definition(gateway, definition))
    return mcp
