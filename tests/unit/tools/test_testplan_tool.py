"""Unit tests for axcess.tools.testplan."""

from collections.abc import Callable
from unittest.mock import AsyncMock

from axcess.config.models import RouterConfig
from axcess.core.errors import ToolOutputError
from axcess.delegate.engine import Delegate
from axcess.providers.base import ProviderRegistry, ProviderResponse
from axcess.tools.testplan import TestsInput, TestsTool, build_prompt, validate_test_plan

PLAN = """## Commands
- `pytest -q tests/test_slug.py`

## Files
```tests/test_slug.py
from app import slugify


def test_slugify() -> None:
    assert slugify("A B") == "a-b"
```
"""


class TestValidateTestPlan:
    """Test test-plan shape checks."""

    def test_valid_plan(self) -> None:
        assert validate_test_plan(PLAN) is None

    def test_missing_commands_section(self) -> None:
        error = validate_test_plan(PLAN.replace("## Commands", "## Steps"))

        assert error is not None
        assert error.message == 'delegate.tests: section "## Commands" is missing.'

    def test_missing_files_section(self) -> None:
        error = validate_test_plan(PLAN.replace("## Files", "## Code"))

        assert error is not None
        assert "## Files" in error.message

    def test_heading_must_start_a_line(self) -> None:
        error = validate_test_plan(PLAN.replace("## Commands", "see ## Commands"))

        assert error is not None

    def test_commands_need_inline_code(self) -> None:
        error = validate_test_plan(PLAN.replace("`pytest -q tests/test_slug.py`", "pytest"))

        assert error is not None
        assert "command line" in error.message

    def test_files_need_fenced_block(self) -> None:
        plan = "## Commands\n- `pytest`\n\n## Files\ntests/test_slug.py: write a test\n"

        error = validate_test_plan(plan)

        assert error is not None
        assert "fenced file block" in error.message


def test_prompt_includes_framework_and_context() -> None:
    data = TestsInput(instructions="Cover slugify", context="Flask app", framework=" pytest ")

    prompt = build_prompt(data, "Cover slugify")

    assert "Preferred framework: pytest." in prompt
    assert "Context:\nFlask app" in prompt
    assert prompt.endswith("User instructions:\nCover slugify\n")


class TestTestsTool:
    """Test the tool end to end over the Delegate."""

    async def test_returns_trimmed_plan(
        self,
        router_config: RouterConfig,
        make_response: Callable[..., ProviderResponse],
    ) -> None:
        handler = AsyncMock(return_value=make_response(f"\n\n{PLAN}\n\n"))
        tool = TestsTool(Delegate(router_config, ProviderRegistry({"openai": handler})))

        result = await tool.handle(TestsInput(instructions="Cover slugify"))

        assert result.is_ok
        assert result.value.text == PLAN.strip()
        assert result.value.result.text == PLAN.strip()
        assert handler.await_args.args[2].temperature == 0.2

    async def test_rejects_bad_plan(
        self,
        router_config: RouterConfig,
        make_response: Callable[..., ProviderResponse],
    ) -> None:
        handler = AsyncMock(return_value=make_response("Run pytest."))
        tool = TestsTool(Delegate(router_config, ProviderRegistry({"openai": handler})))

        result = await tool.handle(TestsInput(instructions="Cover slugify"))

        assert isinstance(result.error, ToolOutputError)
        assert result.error.tool == "delegate.tests"
