"""Unit tests for axcess.mcp.server."""

from typing import Any
from unittest.mock import AsyncMock

from mcp.types import CallToolResult, TextContent

from axcess.config.models import RouterConfig
from axcess.core.types import Result
from axcess.mcp.errors import MCPServerError, MCPToolError
from axcess.mcp.server import AxcessMCPServer, create_axcess_server, to_call_tool_result
from axcess.mcp.types import MCPToolDefinition, MCPToolParameter, MCPToolResult, ToolInputType
from axcess.providers.base import ProviderRegistry


class FakeToolHandler:
    """Tool handler double with a single required ``text`` argument."""

    def __init__(self, name: str = "echo") -> None:
        self._name = name
        self.handle_mock = AsyncMock(return_value=Result.ok(MCPToolResult(text="echoed")))

    @property
    def definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name=self._name,
            description="Echo a value",
            parameters=(
                MCPToolParameter(name="text", type=ToolInputType.STRING, required=True),
                MCPToolParameter(name="count", type=ToolInputType.INTEGER),
            ),
        )

    async def handle(self, arguments: dict[str, Any]) -> Result[MCPToolResult, MCPServerError]:
        return await self.handle_mock(arguments)


class TestAxcessMCPServer:
    """Test tool registration and dispatch."""

    def test_defaults(self) -> None:
        server = AxcessMCPServer()

        assert server.info.name == "axcess-mcp"
        assert server.info.tools == ()

    async def test_list_tools(self) -> None:
        server = AxcessMCPServer(name="custom", version="2.0.0")
        server.register_tool(FakeToolHandler("one"))
        server.register_tool(FakeToolHandler("two"))

        tools = await server.list_tools()

        assert [tool.name for tool in tools] == ["one", "two"]
        assert server.info.version == "2.0.0"

    async def test_call_tool_dispatches_arguments(self) -> None:
        server = AxcessMCPServer()
        handler = FakeToolHandler()
        server.register_tool(handler)

        result = await server.call_tool("echo", {"text": "hi"})

        assert result.value.text == "echoed"
        handler.handle_mock.assert_awaited_once_with({"text": "hi"})

    async def test_unknown_tool(self) -> None:
        server = AxcessMCPServer()

        result = await server.call_tool("missing", {})

        assert isinstance(result.error, MCPToolError)
        assert result.error.message == "Tool not found: missing"
        assert result.error.tool_name == "missing"

    async def test_handler_exception_becomes_error(self) -> None:
        server = AxcessMCPServer()
        handler = FakeToolHandler()
        handler.handle_mock.side_effect = RuntimeError("boom")
        server.register_tool(handler)

        result = await server.call_tool("echo", {"text": "hi"})

        assert result.error.message == "Tool execution failed: boom"
        assert result.error.server_name == "axcess-mcp"


class TestToCallToolResult:
    """Test the mapping onto the MCP wire result."""

    def test_success(self) -> None:
        meta = {"usage": {"total_tokens": 3}}

        wire = to_call_tool_result(Result.ok(MCPToolResult(text="answer", meta=meta)))

        assert wire.content == [TextContent(type="text", text="answer")]
        assert wire.structuredContent == meta
        assert wire.isError is False

    def test_error_tool_result(self) -> None:
        meta = {"error": {"name": "DelegationError", "message": "All failed"}}

        wire = to_call_tool_result(
            Result.ok(MCPToolResult(text="All failed", is_error=True, meta=meta))
        )

        assert wire.isError is True
        assert wire.structuredContent == meta

    def test_empty_meta_is_omitted(self) -> None:
        wire = to_call_tool_result(Result.ok(MCPToolResult(text="plain")))

        assert wire.structuredContent is None

    def test_server_error(self) -> None:
        error = MCPToolError("delegate.run: prompt is required", tool_name="delegate.run")

        wire = to_call_tool_result(Result.err(error))

        assert wire.isError is True
        assert wire.content[0].text == "delegate.run: prompt is required"
        assert wire.structuredContent == {
            "error": {"name": "MCPToolError", "message": "delegate.run: prompt is required"}
        }


class TestBuildFastMCP:
    """Test publishing handlers through FastMCP."""

    async def test_tools_keep_their_argument_schema(self) -> None:
        server = AxcessMCPServer()
        server.register_tool(FakeToolHandler())

        tools = await server.build_fastmcp().list_tools()

        assert [tool.name for tool in tools] == ["echo"]
        schema = tools[0].inputSchema
        assert set(schema["properties"]) == {"text", "count"}
        assert schema["required"] == ["text"]

    async def test_call_drops_absent_optional_arguments(self) -> None:
        server = AxcessMCPServer()
        handler = FakeToolHandler()
        server.register_tool(handler)

        wire = await server.build_fastmcp().call_tool("echo", {"text": "hi"})

        assert isinstance(wire, CallToolResult)
        assert wire.content[0].text == "echoed"
        handler.handle_mock.assert_awaited_once_with({"text": "hi"})


class TestCreateAxcessServer:
    """Test the delegation server factory."""

    def test_registers_delegation_tools(self, router_config: RouterConfig) -> None:
        server = create_axcess_server(router_config, ProviderRegistry())

        assert [tool.name for tool in server.info.tools] == [
            "delegate.run",
            "delegate.diff",
            "delegate.tests",
            "delegate.docs",
        ]

    async def test_run_over_fastmcp(
        self, router_config: RouterConfig, succeeding_handler: AsyncMock
    ) -> None:
        registry = ProviderRegistry({"openai": succeeding_handler})
        server = create_axcess_server(router_config, registry)

        wire = await server.build_fastmcp().call_tool(
            "delegate.run", {"prompt": "hi", "metadata": {"tier": "free"}}
        )

        assert wire.isError is False
        assert wire.content[0].text == "ok"
        assert wire.structuredContent["decision"]["alias"] == "fast"
        assert wire.structuredContent["parameters"]["max_output_tokens"] == 1024

    async def test_delegation_failure_over_fastmcp(self, router_config: RouterConfig) -> None:
        server = create_axcess_server(router_config, ProviderRegistry())

        wire = await server.build_fastmcp().call_tool("delegate.run", {"prompt": "hi"})

        assert wire.isError is True
        assert wire.structuredContent["error"]["name"] == "DelegationError"
