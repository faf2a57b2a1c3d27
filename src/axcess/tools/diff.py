"""delegate.diff: ask for a Git patch and insist on unified-diff output."""

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

TOOL_NAME = "delegate.diff"

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z0-9:-]*\n(.*?)\n```$", re.DOTALL)

_RULES = "\n".join(
    [
        "You are delegate.diff, an assistant that returns Git patches.",
        'Respond with a unified diff using "diff --git" headers and @@ hunks.',
        "Do not include explanations, commentary, or code fences.",
        "Only include files that actually change.",
        "Use LF line endings and preserve existing indentation.",
        "If no change is required, return an empty diff that only contains "
        "diff --git headers with no modifications.",
    ]
)


@dataclass(frozen=True, slots=True)
class FileContext:
    """A file shown to the model as context."""

    path: str
    contents: str


@dataclass(frozen=True, slots=True)
class DiffInput:
    instructions: str
    context: str | None = None
    files: tuple[FileContext, ...] = ()
    options: RoutingOptions = field(default_factory=RoutingOptions)


def render_files(files: tuple[FileContext, ...]) -> str:
    if not files:
        return ""
    rendered = []
    for file in files:
        header = f"File: {file.path}"
        rendered.append(f"{header}\n{'-' * len(header)}\n{file.contents.rstrip()}")
    return "\nProvided files:\n" + "\n\n".join(rendered)


def build_prompt(data: DiffInput, instructions: str) -> str:
    context = f"\nAdditional context:\n{data.context.strip()}" if data.context else ""
    return f"{_RULES}{context}{render_files(data.files)}\n\nUser instructions:\n{instructions}\n"


def strip_code_fences(text: str) -> str:
    """Remove one fence wrapping the whole answer, if present."""
    trimmed = text.strip()
    match = _FENCE_PATTERN.match(trimmed)
    if match:
        return match.group(1).strip()
    return trimmed


def validate_diff(text: str) -> ToolOutputError | None:
    if not text.startswith("diff --git "):
        return ToolOutputError(
            'response is not a unified patch starting with "diff --git".', tool=TOOL_NAME
        )
    if "\n@@" not in text:
        return ToolOutputError("patch has no @@ hunks.", tool=TOOL_NAME)
    return None


@dataclass
class DiffTool:
    """Produce a unified diff for the given instructions and files."""

    delegate: Delegate

    async def handle(self, data: DiffInput) -> Result[ToolResult, AxcessError]:
        instructions = require_instructions(TOOL_NAME, data.instructions)
        if instructions.is_err:
            return Result.err(instructions.error)

        request = build_route_request(
            build_prompt(data, instructions.value), data.options, domain="code"
        )
        return await run_tool(TOOL_NAME, self.delegate, request, strip_code_fences, validate_diff)
