"""Delegation commands: run, diff, tests and docs.

Each command routes the request, calls providers in fallback order and
prints the resulting text. Provider credentials come from the
environment (OPENAI_API_KEY, ANTHROPIC_API_KEY, GOOGLE_API_KEY).
"""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Annotated, Any

import typer

from axcess.cli.commands.common import (
    ConfigDirOption,
    ExplainOption,
    ForceModelOption,
    JsonOption,
    LanguageOption,
    MaxTokensOption,
    TemperatureOption,
    TierOption,
    echo_json,
    fail,
    print_raw_text,
    read_text_argument,
    resolve_config,
    routing_options,
    to_jsonable,
)
from axcess.cli.formatters.tables import (
    create_attempts_table,
    create_key_value_table,
    create_rationale_table,
    print_table,
)
from axcess.core.errors import AxcessError
from axcess.core.types import Result
from axcess.delegate import Delegate
from axcess.providers import build_registry_from_env
from axcess.tools import (
    DiffInput,
    DiffTool,
    DocsInput,
    DocsTool,
    FileContext,
    RunTool,
    TestsInput,
    TestsTool,
    ToolResult,
    build_route_request,
)

InstructionsArgument = Annotated[
    str, typer.Argument(help="What the model should produce, or - to read stdin.")
]
ContextOption = Annotated[
    str | None, typer.Option("--context", help="Extra context appended to the prompt.")
]


def _build_delegate(config_dir: Path | None) -> Delegate:
    return Delegate(resolve_config(config_dir), build_registry_from_env())


def _finish(
    pending: Coroutine[Any, Any, Result[ToolResult, AxcessError]],
    as_json: bool,
    explain: bool,
) -> None:
    result = asyncio.run(pending)
    if result.is_err:
        fail(result.error)

    delegated = result.value.result
    if as_json:
        echo_json(to_jsonable(delegated))
        return

    print_raw_text(result.value.text)
    if explain:
        print_table(create_rationale_table(delegated.rationale))
        print_table(create_attempts_table(delegated.meta.attempts))
        print_table(
            create_key_value_table(
                {
                    "Input tokens": delegated.usage.input_tokens,
                    "Output tokens": delegated.usage.output_tokens,
                    "Total tokens": delegated.usage.total_tokens,
                    "Cost": f"{delegated.cost.total:.6f} {delegated.cost.currency}",
                    "Fallback used": delegated.meta.fallback_used,
                },
                "Usage",
            )
        )


def run(
    prompt: Annotated[str, typer.Argument(help="Prompt text, or - to read stdin.")],
    domain: Annotated[
        str | None, typer.Option("--domain", "-d", help="Domain for the temperature policy.")
    ] = None,
    language: LanguageOption = None,
    tier: TierOption = None,
    temperature: TemperatureOption = None,
    force_model: ForceModelOption = None,
    max_output_tokens: MaxTokensOption = None,
    config_dir: ConfigDirOption = None,
    as_json: JsonOption = False,
    explain: ExplainOption = False,
) -> None:
    """Route a prompt and print the first successful completion."""
    options = routing_options(language, tier, temperature, force_model, max_output_tokens)
    request = build_route_request(read_text_argument(prompt), options, domain=domain)
    tool = RunTool(_build_delegate(config_dir))
    _finish(tool.handle(request), as_json, explain)


def diff(
    instructions: InstructionsArgument,
    files: Annotated[
        list[Path] | None,
        typer.Option(
            "--file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="File shown to the model as context. Repeatable.",
        ),
    ] = None,
    context: ContextOption = None,
    language: LanguageOption = None,
    tier: TierOption = None,
    temperature: TemperatureOption = None,
    force_model: ForceModelOption = None,
    max_output_tokens: MaxTokensOption = None,
    config_dir: ConfigDirOption = None,
    as_json: JsonOption = False,
    explain: ExplainOption = False,
) -> None:
    """Ask for a unified Git patch."""
    data = DiffInput(
        instructions=read_text_argument(instructions),
        context=context,
        files=tuple(
            FileContext(path=str(path), contents=path.read_text(encoding="utf-8"))
            for path in files or []
        ),
        options=routing_options(language, tier, temperature, force_model, max_output_tokens),
    )
    tool = DiffTool(_build_delegate(config_dir))
    _finish(tool.handle(data), as_json, explain)


def tests(
    instructions: InstructionsArgument,
    framework: Annotated[
        str | None, typer.Option("--framework", help="Preferred test framework.")
    ] = None,
    context: ContextOption = None,
    language: LanguageOption = None,
    tier: TierOption = None,
    temperature: TemperatureOption = None,
    force_model: ForceModelOption = None,
    max_output_tokens: MaxTokensOption = None,
    config_dir: ConfigDirOption = None,
    as_json: JsonOption = False,
    explain: ExplainOption = False,
) -> None:
    """Ask for a test plan with commands and files."""
    data = TestsInput(
        instructions=read_text_argument(instructions),
        context=context,
        framework=framework,
        options=routing_options(language, tier, temperature, force_model, max_output_tokens),
    )
    tool = TestsTool(_build_delegate(config_dir))
    _finish(tool.handle(data), as_json, explain)


def docs(
    instructions: InstructionsArgument,
    audience: Annotated[str | None, typer.Option("--audience", help="Target audience.")] = None,
    tone: Annotated[str | None, typer.Option("--tone", help="Writing tone.")] = None,
    context: ContextOption = None,
    language: LanguageOption = None,
    tier: TierOption = None,
    temperature: TemperatureOption = None,
    force_model: ForceModelOption = None,
    max_output_tokens: MaxTokensOption = None,
    config_dir: ConfigDirOption = None,
    as_json: JsonOption = False,
    explain: ExplainOption = False,
) -> None:
    """Ask for a short Markdown document."""
    data = DocsInput(
        instructions=read_text_argument(instructions),
        context=context,
        audience=audience,
        tone=tone,
        options=routing_options(language, tier, temperature, force_model, max_output_tokens),
    )
    tool = DocsTool(_build_delegate(config_dir))
    _finish(tool.handle(data), as_json, explain)


__all__ = ["run", "diff", "tests", "docs"]
