"""delegate.run: route a free-form prompt and return the text unchanged."""

from dataclasses import dataclass

from axcess.core.errors import AxcessError, ToolOutputError
from axcess.core.types import Result
from axcess.delegate.engine import Delegate
from axcess.routing.models import RouteRequest
from axcess.tools.base import ToolResult, run_tool

TOOL_NAME = "delegate.run"


@dataclass
class RunTool:
    """Pass-through tool: no prompt template, no output checks."""

    delegate: Delegate

    async def handle(self, request: RouteRequest) -> Result[ToolResult, AxcessError]:
        if not isinstance(request.prompt, str) or not request.prompt.strip():
            return Result.err(ToolOutputError('field "prompt" is required.', tool=TOOL_NAME))
        return await run_tool(
            TOOL_NAME,
            self.delegate,
            request,
            sanitize=lambda text: text,
            validate=lambda _text: None,
        )
