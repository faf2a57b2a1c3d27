"""Shared pieces of the delegation tools.

A tool turns structured input into a prompt, runs it through the Delegate
and checks that the returned text has the shape the tool promises.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from axcess.core.errors import AxcessError, ToolOutputError
from axcess.core.types import Result
from axcess.delegate.engine import Delegate
from axcess.delegate.models import DelegateResult
from axcess.observability.logging import get_logger
from axcess.routing.models import RouteCaps, RouteMetadata, RouteRequest

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RoutingOptions:
    """Routing hints every tool accepts.

    Attributes:
        language: Declared prompt language.
        tier: Caller tier for the output cap.
        temperature: Explicit temperature.
        force_model: Alias or model key to force.
        max_output_tokens: Requested output cap; ignored unless positive.
    """

    language: str | None = None
    tier: str | None = None
    temperature: float | None = None
    force_model: str | None = None
    max_output_tokens: int | None = None


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Sanitized tool text plus the DelegateResult carrying that same text."""

    text: str
    result: DelegateResult


def build_route_request(
    prompt: str, options: RoutingOptions, domain: str | None = None
) -> RouteRequest:
    """Build the RouteRequest a tool sends to the Delegate."""
    caps = (
        RouteCaps(max_output_tokens=options.max_output_tokens)
        if options.max_output_tokens is not None and options.max_output_tokens > 0
        else None
    )
    return RouteRequest(
        prompt=prompt,
        force_model=options.force_model,
        caps=caps,
        metadata=RouteMetadata(
            language=options.language,
            tier=options.tier,
            domain=domain,
            temperature=options.temperature,
        ),
    )


def require_instructions(tool: str, instructions: str | None) -> Result[str, ToolOutputError]:
    """Return the stripped instructions, or an error when they are blank."""
    if not instructions or not instructions.strip():
        return Result.err(
            ToolOutputError('field "instructions" is required.', tool=tool, field="instructions")
        )
    return Result.ok(instructions.strip())


async def run_tool(
    tool: str,
    delegate: Delegate,
    request: RouteRequest,
    sanitize: Callable[[str], str],
    validate: Callable[[str], ToolOutputError | None],
) -> Result[ToolResult, AxcessError]:
    """Delegate a request, then sanitize and validate its text."""
    executed = await delegate.execute(request)
    if executed.is_err:
        return Result.err(executed.error)

    text = sanitize(executed.value.text)
    problem = validate(text)
    if problem is not None:
        log.warning("tool.output.rejected", tool=tool, error=problem.message)
        return Result.err(problem)

    log.info("tool.output.accepted", tool=tool, length=len(text))
    return Result.ok(ToolResult(text=text, result=replace(executed.value, text=text)))
