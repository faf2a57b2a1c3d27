"""axcess tool handlers for the MCP server.

Each handler wraps one delegation tool and is exposed as an MCP tool:
- delegate.run: route a free-form prompt
- delegate.diff: unified Git patch
- delegate.tests: test plan with "## Commands" and "## Files"
- delegate.docs: short Markdown document

Handlers return Result.err(MCPToolError) only for malformed arguments.
Routing, provider and output-validation failures come back as an
MCPToolResult with is_error=True and the error payload in ``meta``.
"""

from dataclasses import asdict, dataclass
import json
from typing import Any

from axcess.core.errors import AxcessError, DelegationError, ProviderError
from axcess.core.types import Result
from axcess.delegate.engine import Delegate
from axcess.delegate.models import DelegateResult
from axcess.mcp.errors import MCPServerError, MCPToolError
from axcess.mcp.types import MCPToolDefinition, MCPToolParameter, MCPToolResult, ToolInputType
from axcess.observability.logging import get_logger
from axcess.routing.models import RouteCaps, RouteMetadata, RouteRequest
from axcess.tools import (
    DiffInput,
    DiffTool,
    DocsInput,
    DocsTool,
    FileContext,
    RoutingOptions,
    RunTool,
    TestsInput,
    TestsTool,
    ToolResult,
)

log = get_logger(__name__)

ROUTING_PARAMETERS = (
    MCPToolParameter(
        name="language",
        type=ToolInputType.STRING,
        description="Declared prompt language (pt, en, es). Detected when absent.",
    ),
    MCPToolParameter(
        name="tier",
        type=ToolInputType.STRING,
        description="Caller tier used to pick the output cap (e.g. free, pro).",
    ),
    MCPToolParameter(
        name="temperature",
        type=ToolInputType.NUMBER,
        description="Explicit sampling temperature, clamped to [0, 2].",
    ),
    MCPToolParameter(
        name="force_model",
        type=ToolInputType.STRING,
        description="Alias or provider:model key that bypasses routing heuristics.",
    ),
    MCPToolParameter(
        name="max_output_tokens",
        type=ToolInputType.INTEGER,
        description="Requested output-token cap; ignored unless positive.",
    ),
)

INSTRUCTIONS_PARAMETER = MCPToolParameter(
    name="instructions",
    type=ToolInputType.STRING,
    description="What the model should produce.",
    required=True,
)

CONTEXT_PARAMETER = MCPToolParameter(
    name="context",
    type=ToolInputType.STRING,
    description="Extra context appended to the prompt.",
)


class _ArgumentError(Exception):
    """Malformed tool argument."""


def _get(
    arguments: dict[str, Any],
    name: str,
    kind: type | tuple[type, ...],
    *,
    required: bool = False,
) -> Any:
    value = arguments.get(name)
    if value is None:
        if required:
            raise _ArgumentError(f"{name} is required")
        return None
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
        raise _ArgumentError(f"{name} has an invalid type")
    return value


def _routing_options(arguments: dict[str, Any]) -> RoutingOptions:
    temperature = _get(arguments, "temperature", (int, float))
    return RoutingOptions(
        language=_get(arguments, "language", str),
        tier=_get(arguments, "tier", str),
        temperature=float(temperature) if temperature is not None else None,
        force_model=_get(arguments, "force_model", str),
        max_output_tokens=_get(arguments, "max_output_tokens", int),
    )


def _jsonable(value: Any) -> Any:
    return json.loads(json.dumps(value, default=str))


def success_meta(result: DelegateResult) -> dict[str, Any]:
    """Rationale, usage, cost and execution metadata of a delegated call."""
    return _jsonable(
        {
            "decision": asdict(result.decision),
            "parameters": asdict(result.parameters),
            "rationale": list(result.rationale),
            "usage": asdict(result.usage),
            "cost": asdict(result.cost),
            "meta": {
                "fallback_used": result.meta.fallback_used,
                "attempts": [asdict(attempt) for attempt in result.meta.attempts],
                "raw_response": result.meta.raw_response,
            },
        }
    )


def error_meta(error: AxcessError) -> dict[str, Any]:
    """Normalized error payload returned alongside an is_error result."""
    payload: dict[str, Any] = {"name": type(error).__name__, "message": error.message}
    if isinstance(error, ProviderError):
        payload["kind"] = error.kind.value
    if isinstance(error, DelegationError):
        payload["attempts"] = [asdict(attempt) for attempt in error.attempts]
    return _jsonable({"error": payload})


def to_tool_result(tool: str, result: Result[ToolResult, AxcessError]) -> MCPToolResult:
    """Map a delegation tool outcome to the MCP result sent to the client."""
    if result.is_err:
        log.warning("mcp.tool.failed", tool=tool, error=result.error.message)
        return MCPToolResult(
            text=result.error.message,
            is_error=True,
            meta=error_meta(result.error),
        )

    delegated = result.value.result
    if delegated.meta.fallback_used:
        log.warning(
            "mcp.tool.fallback_used",
            tool=tool,
            attempts=[
                f"{a.provider}/{a.model}:{'ok' if a.success else 'fail'}"
                for a in delegated.meta.attempts
            ],
        )
    else:
        log.info(
            "mcp.tool.completed",
            tool=tool,
            provider=delegated.decision.provider,
            model=delegated.decision.model,
        )
    return MCPToolResult(text=result.value.text, meta=success_meta(delegated))


def _invalid(tool: str, error: _ArgumentError) -> Result[MCPToolResult, MCPServerError]:
    log.warning("mcp.tool.invalid_arguments", tool=tool, error=str(error))
    return Result.err(MCPToolError(f"{tool}: {error}", tool_name=tool))


@dataclass
class DelegateRunHandler:
    """Handler for the delegate.run tool."""

    tool: RunTool

    @property
    def definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name="delegate.run",
            description="Route a prompt to the configured models and return the answer.",
            parameters=(
                MCPToolParameter(
                    name="prompt",
                    type=ToolInputType.STRING,
                    description="Prompt forwarded to the router.",
                    required=True,
                ),
                MCPToolParameter(
                    name="force_model",
                    type=ToolInputType.STRING,
                    description="Alias or provider:model key that bypasses routing heuristics.",
                ),
                MCPToolParameter(
                    name="metadata",
                    type=ToolInputType.OBJECT,
                    description="Optional routing hints.",
                    properties=(
                        MCPToolParameter(name="language", type=ToolInputType.STRING),
                        MCPToolParameter(name="tier", type=ToolInputType.STRING),
                        MCPToolParameter(
                            name="domain",
                            type=ToolInputType.STRING,
                            enum=("code", "creative", "default"),
                        ),
                        MCPToolParameter(name="temperature", type=ToolInputType.NUMBER),
                    ),
                ),
                MCPToolParameter(
                    name="caps",
                    type=ToolInputType.OBJECT,
                    description="Extra limits for the request.",
                    properties=(
                        MCPToolParameter(name="max_output_tokens", type=ToolInputType.INTEGER),
                    ),
                ),
            ),
        )

    async def handle(self, arguments: dict[str, Any]) -> Result[MCPToolResult, MCPServerError]:
        name = self.definition.name
        try:
            prompt = _get(arguments, "prompt", str, required=True)
            force_model = _get(arguments, "force_model", str)
            metadata = _get(arguments, "metadata", dict) or {}
            caps = _get(arguments, "caps", dict)
            temperature = _get(metadata, "temperature", (int, float))
            request = RouteRequest(
                prompt=prompt,
                force_model=force_model,
                caps=RouteCaps(max_output_tokens=_get(caps, "max_output_tokens", int))
                if caps is not None
                else None,
                metadata=RouteMetadata(
                    language=_get(metadata, "language", str),
                    tier=_get(metadata, "tier", str),
                    domain=_get(metadata, "domain", str),
                    temperature=float(temperature) if temperature is not None else None,
                ),
            )
        except _ArgumentError as e:
            return _invalid(name, e)

        log.info("mcp.tool.delegate_run", force_model=force_model)
        return Result.ok(to_tool_result(name, await self.tool.handle(request)))


@dataclass
class DelegateDiffHandler:
    """Handler for the delegate.diff tool."""

    tool: DiffTool

    @property
    def definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name="delegate.diff",
            description="Ask the routed model for a unified Git patch (diff --git).",
            parameters=(
                INSTRUCTIONS_PARAMETER,
                CONTEXT_PARAMETER,
                MCPToolParameter(
                    name="files",
                    type=ToolInputType.ARRAY,
                    description="Files shown to the model as context.",
                    properties=(
                        MCPToolParameter(name="path", type=ToolInputType.STRING, required=True),
                        MCPToolParameter(
                            name="contents", type=ToolInputType.STRING, required=True
                        ),
                    ),
                ),
                *ROUTING_PARAMETERS,
            ),
        )

    async def handle(self, arguments: dict[str, Any]) -> Result[MCPToolResult, MCPServerError]:
        name = self.definition.name
        try:
            files = []
            for item in _get(arguments, "files", list) or []:
                if not isinstance(item, dict):
                    raise _ArgumentError("files entries must be objects")
                files.append(
                    FileContext(
                        path=_get(item, "path", str, required=True),
                        contents=_get(item, "contents", str, required=True),
                    )
                )
            data = DiffInput(
                instructions=_get(arguments, "instructions", str, required=True),
                context=_get(arguments, "context", str),
                files=tuple(files),
                options=_routing_options(arguments),
            )
        except _ArgumentError as e:
            return _invalid(name, e)

        log.info("mcp.tool.delegate_diff", file_count=len(data.files))
        return Result.ok(to_tool_result(name, await self.tool.handle(data)))


@dataclass
class DelegateTestsHandler:
    """Handler for the delegate.tests tool."""

    tool: TestsTool

    @property
    def definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name="delegate.tests",
            description=(
                "Ask the routed model for a test plan with '## Commands' and '## Files' sections."
            ),
            parameters=(
                INSTRUCTIONS_PARAMETER,
                CONTEXT_PARAMETER,
                MCPToolParameter(
                    name="framework",
                    type=ToolInputType.STRING,
                    description="Preferred test framework.",
                ),
                *ROUTING_PARAMETERS,
            ),
        )

    async def handle(self, arguments: dict[str, Any]) -> Result[MCPToolResult, MCPServerError]:
        name = self.definition.name
        try:
            data = TestsInput(
                instructions=_get(arguments, "instructions", str, required=True),
                context=_get(arguments, "context", str),
                framework=_get(arguments, "framework", str),
                options=_routing_options(arguments),
            )
        except _ArgumentError as e:
            return _invalid(name, e)

        return Result.ok(to_tool_result(name, await self.tool.handle(data)))


@dataclass
class DelegateDocsHandler:
    """Handler for the delegate.docs tool."""

    tool: DocsTool

    @property
    def definition(self) -> MCPToolDefinition:
        return MCPToolDefinition(
            name="delegate.docs",
            description="Ask the routed model for a short Markdown document.",
            parameters=(
                INSTRUCTIONS_PARAMETER,
                CONTEXT_PARAMETER,
                MCPToolParameter(
                    name="audience",
                    type=ToolInputType.STRING,
                    description="Intended readers of the document.",
                ),
                MCPToolParameter(
                    name="tone",
                    type=ToolInputType.STRING,
                    description="Desired writing tone.",
                ),
                *ROUTING_PARAMETERS,
            ),
        )

    async def handle(self, arguments: dict[str, Any]) -> Result[MCPToolResult, MCPServerError]:
        name = self.definition.name
        try:
            data = DocsInput(
                instructions=_get(arguments, "instructions", str, required=True),
                context=_get(arguments, "context", str),
                audience=_get(arguments, "audience", str),
                tone=_get(arguments, "tone", str),
                options=_routing_options(arguments),
            )
        except _ArgumentError as e:
            return _invalid(name, e)

        return Result.ok(to_tool_result(name, await self.tool.handle(data)))


def create_tool_handlers(
    delegate: Delegate,
) -> tuple[DelegateRunHandler, DelegateDiffHandler, DelegateTestsHandler, DelegateDocsHandler]:
    """Build the four delegation handlers around one Delegate."""
    return (
        DelegateRunHandler(RunTool(delegate)),
        DelegateDiffHandler(DiffTool(delegate)),
        DelegateTestsHandler(TestsTool(delegate)),
        DelegateDocsHandler(DocsTool(delegate)),
    )
