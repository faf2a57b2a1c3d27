"""MCP server exposing the axcess delegation tools.

Tool handlers are registered on an AxcessMCPServer, which can call them
directly (call_tool) or publish them through the MCP SDK's FastMCP server
over stdio or SSE.

Example:
    server = create_axcess_server(load_router_config(), build_registry_from_env())
    await server.serve()
"""

from collections.abc import Sequence
import inspect
from typing import Any, Protocol

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from axcess import __version__
from axcess.config.models import RouterConfig
from axcess.core.types import Result
from axcess.delegate.engine import Delegate
from axcess.mcp.errors import MCPServerError, MCPToolError
from axcess.mcp.handlers import create_tool_handlers
from axcess.mcp.types import MCPServerInfo, MCPToolDefinition, MCPToolResult
from axcess.observability.logging import get_logger
from axcess.providers.base import ProviderRegistry

log = get_logger(__name__)

SERVER_NAME = "axcess-mcp"


class ToolHandler(Protocol):
    """A tool the server can publish."""

    @property
    def definition(self) -> MCPToolDefinition: ...

    async def handle(
        self, arguments: dict[str, Any]
    ) -> Result[MCPToolResult, MCPServerError]: ...


def to_call_tool_result(result: Result[MCPToolResult, MCPServerError]) -> CallToolResult:
    """Convert a handler outcome into the MCP wire result.

    Metadata travels as ``structuredContent``; failures set ``isError``.
    """
    if result.is_err:
        error = result.error
        return CallToolResult(
            content=[TextContent(type="text", text=error.message)],
            structuredContent={"error": {"name": type(error).__name__, "message": error.message}},
            isError=True,
        )

    tool_result = result.value
    return CallToolResult(
        content=[TextContent(type="text", text=tool_result.text)],
        structuredContent=tool_result.meta or None,
        isError=tool_result.is_error,
    )


def _tool_signature(definition: MCPToolDefinition) -> inspect.Signature:
    """Build the call signature FastMCP derives the argument schema from."""
    required = [p for p in definition.parameters if p.required]
    optional = [p for p in definition.parameters if not p.required]
    parameters = [
        inspect.Parameter(p.name, inspect.Parameter.KEYWORD_ONLY, annotation=p.python_type)
        for p in required
    ] + [
        inspect.Parameter(
            p.name, inspect.Parameter.KEYWORD_ONLY, annotation=p.python_type, default=None
        )
        for p in optional
    ]
    return inspect.Signature(parameters, return_annotation=CallToolResult)


class AxcessMCPServer:
    """Registry of tool handlers plus the FastMCP transport around them."""

    def __init__(self, *, name: str = SERVER_NAME, version: str = __version__) -> None:
        self._name = name
        self._version = version
        self._tool_handlers: dict[str, ToolHandler] = {}

    @property
    def info(self) -> MCPServerInfo:
        return MCPServerInfo(
            name=self._name,
            version=self._version,
            tools=tuple(h.definition for h in self._tool_handlers.values()),
        )

    def register_tool(self, handler: ToolHandler) -> None:
        name = handler.definition.name
        self._tool_handlers[name] = handler
        log.info("mcp.server.tool_registered", tool=name)

    async def list_tools(self) -> Sequence[MCPToolDefinition]:
        return tuple(h.definition for h in self._tool_handlers.values())

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any],
    ) -> Result[MCPToolResult, MCPServerError]:
        """Call a registered tool.

        Returns:
            Result containing the tool result, or an MCPToolError when the
            tool is unknown or raised.
        """
        handler = self._tool_handlers.get(name)
        if handler is None:
            return Result.err(
                MCPToolError(f"Tool not found: {name}", tool_name=name, server_name=self._name)
            )

        try:
            return await handler.handle(arguments)
        except Exception as e:
            log.exception("mcp.server.tool_error", tool=name, error=str(e))
            return Result.err(
                MCPToolError(
                    f"Tool execution failed: {e}",
                    tool_name=name,
                    server_name=self._name,
                )
            )

    def build_fastmcp(self, *, host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
        """Create a FastMCP server with every registered tool attached."""
        server = FastMCP(self._name, host=host, port=port)

        for name, handler in self._tool_handlers.items():
            definition = handler.definition

            def _make_tool_wrapper(tool_name: str) -> Any:
                async def tool_wrapper(**kwargs: Any) -> CallToolResult:
                    arguments = {k: v for k, v in kwargs.items() if v is not None}
                    return to_call_tool_result(await self.call_tool(tool_name, arguments))

                return tool_wrapper

            wrapper = _make_tool_wrapper(name)
            wrapper.__signature__ = _tool_signature(definition)  # type: ignore[attr-defined]
            server.add_tool(wrapper, name=definition.name, description=definition.description)

        return server

    async def serve(
        self,
        transport: str = "stdio",
        host: str = "127.0.0.1",
        port: int = 8000,
    ) -> None:
        """Serve MCP requests until the client disconnects.

        Args:
            transport: "stdio" or "sse".
            host: Host to bind to (SSE only).
            port: Port to bind to (SSE only).
        """
        server = self.build_fastmcp(host=host, port=port)
        log.info(
            "mcp.server.starting",
            name=self._name,
            transport=transport,
            tools=len(self._tool_handlers),
        )

        if transport == "sse":
            await server.run_sse_async()
        else:
            await server.run_stdio_async()

        log.info("mcp.server.stopped", name=self._name)


def create_axcess_server(
    config: RouterConfig,
    registry: ProviderRegistry,
    *,
    name: str = SERVER_NAME,
    version: str = __version__,
) -> AxcessMCPServer:
    """Wire a Delegate into the four delegation tools and register them."""
    delegate = Delegate(config, registry)
    server = AxcessMCPServer(name=name, version=version)
    for handler in create_tool_handlers(delegate):
        server.register_tool(handler)

    log.info(
        "mcp.server.created",
        name=name,
        version=version,
        tool_names=[tool.name for tool in server.info.tools],
    )
    return server
