"""Rich formatters for CLI output.

This module provides a shared Console instance so every command renders
with the same theme.

Semantic Colors:
- green: success
- yellow: warning
- red: error
- blue: info
"""

from rich.console import Console
from rich.theme import Theme

AXCESS_THEME = Theme(
    {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
        "muted": "dim",
        "highlight": "bold cyan",
    }
)

console = Console(theme=AXCESS_THEME)

__all__ = ["console", "AXCESS_THEME"]
