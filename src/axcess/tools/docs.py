"""delegate.docs: ask for a short Markdown document."""

from dataclasses import dataclass, field

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

TOOL_NAME = "delegate.docs"
MAX_DOC_LINES = 200

_RULES = "\n".join(
    [
        "You are delegate.docs, a technical writer producing concise Markdown.",
        f"Return a short document under {MAX_DOC_LINES} lines.",
        "Begin with a single H1 heading summarizing the document.",
        "Organize content into focused sections using H2 or H3 headings.",
        "Avoid introductions, apologies, or filler text.",
        "Use bullet lists only when conveying steps or key points.",
        "Do not include code fences unless strictly necessary for snippets.",
    ]
)


@dataclass(frozen=True, slots=True)
class DocsInput:
    instructions: str
    context: str | None = None
    audience: str | None = None
    tone: str | None = None
    options: RoutingOptions = field(default_factory=RoutingOptions)


def build_prompt(data: DocsInput, instructions: str) -> str:
    audience = f"\nTarget audience: {data.audience.strip()}." if data.audience else ""
    tone = f"\nTone: {data.tone.strip()}." if data.tone else ""
    context = f"\nContext:\n{data.context.strip()}" if data.context else ""
    return f"{_RULES}{audience}{tone}{context}\n\nUser instructions:\n{instructions}\n"


def validate_document(text: str) -> ToolOutputError | None:
    if not text.startswith("# "):
        return ToolOutputError("document must start with an H1 heading.", tool=TOOL_NAME)
    if len(text.splitlines()) > MAX_DOC_LINES:
        return ToolOutputError(
            f"document exceeds the {MAX_DOC_LINES}-line limit.", tool=TOOL_NAME
        )
    return None


@dataclass
class DocsTool:
    """Produce a concise Markdown document."""

    delegate: Delegate

    async def handle(self, data: DocsInput) -> Result[ToolResult, AxcessError]:
        instructions = require_instructions(TOOL_NAME, data.instructions)
        if instructions.is_err:
            return Result.err(instructions.error)

        request = build_route_request(
            build_prompt(data, instructions.value), data.options, domain="default"
        )
        return await run_tool(TOOL_NAME, self.delegate, request, str.strip, validate_document)
