"""axcess CLI main entry point.

This module defines the main Typer application and registers the
routing, delegation, config and MCP server commands.
"""

from typing import Annotated

import typer

from axcess import __version__
from axcess.cli.commands import config, delegate, mcp, route
from axcess.cli.formatters import console
from axcess.observability import configure_logging, set_console_logging

app = typer.Typer(
    name="axcess",
    help="axcess - policy-driven LLM request router",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("route")(route.route)
app.command("run")(delegate.run)
app.command("diff")(delegate.diff)
app.command("tests")(delegate.tests)
app.command("docs")(delegate.docs)
app.add_typer(config.app, name="config")
app.add_typer(mcp.app, name="mcp")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]axcess[/] version [green]{__version__}[/]")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print structured logs to stderr.")
    ] = False,
) -> None:
    """axcess - policy-driven LLM request router.

    Picks a model, generation parameters and fallbacks for each prompt,
    then calls providers in order until one succeeds.

    Use [bold cyan]axcess COMMAND --help[/] for command-specific help.
    """
    configure_logging()
    set_console_logging(verbose)


__all__ = ["app", "main"]
