"""CLI command modules for axcess."""

from axcess.cli.commands import config, delegate, mcp, route

__all__ = ["config", "delegate", "mcp", "route"]
