"""MCP command group for axcess.

Start the MCP (Model Context Protocol) server and list its tools.
"""

import asyncio
from pathlib import Path
from typing import Annotated

from rich.console import Console
import typer

from axcess.cli.commands.common import ConfigDirOption, resolve_config
from axcess.cli.formatters import console
from axcess.cli.formatters.panels import print_error, print_info, print_success
from axcess.mcp.server import AxcessMCPServer, create_axcess_server
from axcess.providers import build_registry_from_env

# stdout is the JSON-RPC channel under stdio
_stderr_console = Console(stderr=True)

app = typer.Typer(
    name="mcp",
    help="MCP (Model Context Protocol) server commands.",
    no_args_is_help=True,
)


def _build_server(config_dir: Path | None) -> AxcessMCPServer:
    return create_axcess_server(resolve_config(config_dir), build_registry_from_env())


async def _run_mcp_server(server: AxcessMCPServer, host: str, port: int, transport: str) -> None:
    tool_count = len(server.info.tools)

    if transport == "stdio":
        _stderr_console.print(f"[green]MCP Server starting on {transport}...[/green]")
        _stderr_console.print(f"[blue]Registered {tool_count} tools[/blue]")
        _stderr_console.print("[blue]Reading from stdin, writing to stdout[/blue]")
        _stderr_console.print("[blue]Press Ctrl+C to stop[/blue]")
    else:
        print_success(f"MCP Server starting on {transport}...")
        print_info(f"Registered {tool_count} tools")
        print_info(f"Listening on {host}:{port}")
        print_info("Press Ctrl+C to stop")

    await server.serve(transport=transport, host=host, port=port)


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Host to bind to (sse only)."),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind to (sse only)."),
    ] = 8000,
    transport: Annotated[
        str,
        typer.Option("--transport", "-t", help="Transport type: stdio or sse."),
    ] = "stdio",
    config_dir: ConfigDirOption = None,
) -> None:
    """Start the MCP server.

    Exposes the delegation tools to MCP clients:
    - delegate.run: route a prompt and return the answer
    - delegate.diff: unified Git patch
    - delegate.tests: test plan
    - delegate.docs: short Markdown document

    Examples:

        # Start with stdio transport (for desktop MCP clients)
        axcess mcp serve

        # Start with SSE transport on a custom port
        axcess mcp serve --transport sse --port 9000
    """
    if transport not in ("stdio", "sse"):
        print_error(f"Unknown transport: {transport} (expected stdio or sse)")
        raise typer.Exit(1)

    server = _build_server(config_dir)
    try:
        asyncio.run(_run_mcp_server(server, host, port, transport))
    except KeyboardInterrupt:
        print_info("\nMCP Server stopped")


@app.command()
def info(config_dir: ConfigDirOption = None) -> None:
    """Show MCP server information and available tools."""
    server_info = _build_server(config_dir).info

    console.print()
    console.print("[bold]MCP Server Information[/bold]")
    console.print(f"  Name: {server_info.name}")
    console.print(f"  Version: {server_info.version}")
    console.print()

    console.print("[bold]Available Tools[/bold]")
    for tool in server_info.tools:
        console.print(f"  [green]{tool.name}[/green]")
        console.print(f"    {tool.description}")
        if tool.parameters:
            console.print("    Parameters:")
            for param in tool.parameters:
                required = "[red]*[/red]" if param.required else ""
                console.print(f"      - {param.name}{required}: {param.description}")
        console.print()


__all__ = ["app"]
