"""MCP error types for axcess."""

from typing import Any

from axcess.core.errors import AxcessError


class MCPServerError(AxcessError):
    """Failure inside the MCP server layer.

    Attributes:
        server_name: Name of the server that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        server_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.server_name = server_name


class MCPToolError(MCPServerError):
    """Tool lookup, argument or execution failure.

    Attributes:
        tool_name: Name of the tool involved.
    """

    def __init__(
        self,
        message: str,
        *,
        tool_name: str,
        server_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, server_name=server_name, details=details)
        self.tool_name = tool_name
