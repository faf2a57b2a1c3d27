"""MCP (Model Context Protocol) server for axcess.

Publishes delegate.run, delegate.diff, delegate.tests and delegate.docs
to MCP clients over stdio or SSE.
"""

from axcess.mcp.errors import MCPServerError, MCPToolError
from axcess.mcp.handlers import (
    DelegateDiffHandler,
    DelegateDocsHandler,
    DelegateRunHandler,
    DelegateTestsHandler,
    create_tool_handlers,
    to_tool_result,
)
from axcess.mcp.server import AxcessMCPServer, create_axcess_server, to_call_tool_result
from axcess.mcp.types import (
    MCPServerInfo,
    MCPToolDefinition,
    MCPToolParameter,
    MCPToolResult,
    ToolInputType,
)

__all__ = [
    "MCPServerError",
    "MCPToolError",
    "DelegateRunHandler",
    "DelegateDiffHandler",
    "DelegateTestsHandler",
    "DelegateDocsHandler",
    "create_tool_handlers",
    "to_tool_result",
    "AxcessMCPServer",
    "create_axcess_server",
    "to_call_tool_result",
    "MCPServerInfo",
    "MCPToolDefinition",
    "MCPToolParameter",
    "MCPToolResult",
    "ToolInputType",
]
