"""Delegation tools: prompt templates and output checks around the Delegate.

- delegate.run: free-form prompt, text returned as is
- delegate.diff: unified Git patch
- delegate.tests: "## Commands" / "## Files" test plan
- delegate.docs: short Markdown document
"""

from axcess.tools.base import RoutingOptions, ToolResult, build_route_request
from axcess.tools.diff import DiffInput, DiffTool, FileContext
from axcess.tools.docs import DocsInput, DocsTool
from axcess.tools.run import RunTool
from axcess.tools.testplan import TestsInput, TestsTool

__all__ = [
    "RoutingOptions",
    "ToolResult",
    "build_route_request",
    "RunTool",
    "DiffTool",
    "DiffInput",
    "FileContext",
    "TestsTool",
    "TestsInput",
    "DocsTool",
    "DocsInput",
]
