"""delegate.tests: ask for a test plan with "## Commands" and "## Files"."""

from dataclasses import dataclass, field
import re

from axcess.core.errors import AxcessError, ToolOutputError
from axcess.core.types import Result
from axcess.delegate.engine import Delegate
from axcess.tools.base import (
    RoutingOptions,
    ToolResult,
    build_route_request,
    require_instructions,
    run_tool,
)

TOOL_NAME = "delegate.tests"

_RULES = "\n".join(
    [
        "You are delegate.tests, an assistant that designs deterministic testing plans.",
        'Return Markdown with exactly two sections: "## Commands" and "## Files" in this order.',
        'In "## Commands" list shell commands using bullet points with inline code.',
        'In "## Files" provide one or more fenced code blocks labelled with the file path, '
        "like ```path/to/file.ext`.",
        "Use deterministic seeds and avoid external services.",
        "Do not add commentary outside of these sections.",
    ]
)

_COMMANDS_HEADING = re.compile(r"^## Commands", re.MULTILINE)
_FILES_HEADING = re.compile(r"^## Files", re.MULTILINE)
_INLINE_CODE = re.compile(r"`[^`\n]+`")
_FENCED_BLOCK = re.compile(r"```[^\n]*\n.+?```", re.DOTALL)


@dataclass(frozen=True, slots=True)
class TestsInput:
    __test__ = False

    instructions: str
    context: str | None = None
    framework: str | None = None
    options: RoutingOptions = field(default_factory=RoutingOptions)


def build_prompt(data: TestsInput, instructions: str) -> str:
    framework = f"\nPreferred framework: {data.framework.strip()}." if data.framework else ""
    context = f"\nContext:\n{data.context.strip()}" if data.context else ""
    return f"{_RULES}{framework}{context}\n\nUser instructions:\n{instructions}\n"


def validate_test_plan(text: str) -> ToolOutputError | None:
    if not _COMMANDS_HEADING.search(text):
        return ToolOutputError('section "## Commands" is missing.', tool=TOOL_NAME)
    if not _FILES_HEADING.search(text):
        return ToolOutputError('section "## Files" is missing.', tool=TOOL_NAME)

    files_index = text.find("## Files")
    if not _INLINE_CODE.search(text[:files_index]):
        return ToolOutputError("no command line found in the Commands section.", tool=TOOL_NAME)
    if not _FENCED_BLOCK.search(text[files_index:]):
        return ToolOutputError("no fenced file block found in the Files section.", tool=TOOL_NAME)
    return None


@dataclass
class TestsTool:
    """Produce a deterministic test plan."""

    __test__ = False

    delegate: Delegate

    async def handle(self, data: TestsInput) -> Result[ToolResult, AxcessError]:
        instructions = require_instructions(TOOL_NAME, data.instructions)
        if instructions.is_err:
            return Result.err(instructions.error)

        request = build_route_request(
            build_prompt(data, instructions.value), data.options, domain="code"
        )
        return await run_tool(TOOL_NAME, self.delegate, request, str.strip, validate_test_plan)
