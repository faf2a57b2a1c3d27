"""Rich tables for route decisions, attempts and configuration."""

from typing import Any

from rich.markup import escape
from rich.table import Table

from axcess.cli.formatters import console
from axcess.delegate.models import AttemptLog


def create_table(
    title: str | None = None,
    *,
    show_header: bool = True,
    border_style: str = "blue",
    header_style: str = "bold cyan",
) -> Table:
    """Create a Rich Table with the shared styling.

    Example:
        table = create_table("Attempts")
        table.add_column("Alias", style="cyan")
        table.add_row("fast")
        print_table(table)
    """
    return Table(
        title=title,
        show_header=show_header,
        border_style=border_style,
        header_style=header_style,
        row_styles=["", "dim"],
    )


def create_key_value_table(
    data: dict[str, Any],
    title: str | None = None,
    *,
    key_style: str = "cyan",
) -> Table:
    """Create a two-column table for key-value data.

    Args:
        data: Dictionary of key-value pairs to display.
        title: Optional table title.
        key_style: Style for the key column.

    Returns:
        Rich Table populated with the key-value data.
    """
    table = create_table(title, show_header=False)
    table.add_column("Key", style=key_style, no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(str(key), str(value))

    return table


def create_rationale_table(rationale: tuple[str, ...], title: str = "Rationale") -> Table:
    """Number each rationale line in evaluation order."""
    table = create_table(title)
    table.add_column("#", justify="right", style="muted")
    table.add_column("Step")
    for index, line in enumerate(rationale, start=1):
        table.add_row(str(index), escape(line))
    return table


def create_attempts_table(attempts: tuple[AttemptLog, ...], title: str = "Attempts") -> Table:
    """List delegate attempts with a colored status column."""
    table = create_table(title)
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Provider/Model")
    table.add_column("Status", justify="center")
    table.add_column("Error")
    for attempt in attempts:
        status = "[success]ok[/]" if attempt.success else "[error]failed[/]"
        error = escape(attempt.error or "")
        if attempt.error_kind is not None:
            error = f"\\[{attempt.error_kind}] {error}"
        table.add_row(attempt.alias, f"{attempt.provider}/{attempt.model}", status, error)
    return table


def print_table(table: Table) -> None:
    """Print a Rich Table to the shared console."""
    console.print(table)


__all__ = [
    "create_table",
    "create_key_value_table",
    "create_rationale_table",
    "create_attempts_table",
    "print_table",
]
