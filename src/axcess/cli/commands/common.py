"""Helpers shared by the CLI commands."""

from dataclasses import asdict
import json
from pathlib import Path
import sys
from typing import Annotated, Any, NoReturn

import typer

from axcess.cli.formatters import console
from axcess.cli.formatters.panels import print_error
from axcess.cli.formatters.tables import (
    create_attempts_table,
    create_key_value_table,
    create_rationale_table,
    print_table,
)
from axcess.config import (
    RouterConfig,
    config_exists,
    get_config_dir,
    get_default_router_config,
    load_router_config,
)
from axcess.core.errors import AxcessError, DelegationError
from axcess.routing.models import RouteResult
from axcess.tools.base import RoutingOptions

ConfigDirOption = Annotated[
    Path | None,
    typer.Option(
        "--config-dir",
        "-c",
        help="Directory holding models.yaml and policies.yaml (default: ~/.axcess).",
    ),
]
LanguageOption = Annotated[
    str | None, typer.Option("--language", "-l", help="Declared prompt language (pt, en, es).")
]
TierOption = Annotated[str | None, typer.Option("--tier", "-t", help="Caller tier for the cap.")]
TemperatureOption = Annotated[
    float | None, typer.Option("--temperature", help="Explicit sampling temperature.")
]
ForceModelOption = Annotated[
    str | None, typer.Option("--model", "-m", help="Force an alias or provider:model key.")
]
MaxTokensOption = Annotated[
    int | None, typer.Option("--max-output-tokens", help="Requested output-token cap.")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the full result as JSON.")]
ExplainOption = Annotated[
    bool, typer.Option("--explain", "-e", help="Show rationale, attempts, usage and cost.")
]


def resolve_config(config_dir: Path | None) -> RouterConfig:
    """Load the configuration, falling back to the built-in defaults.

    Raises:
        typer.Exit: If the files exist but fail validation.
    """
    directory = config_dir or get_config_dir()
    if not config_exists(directory):
        if config_dir is not None:
            print_error(f"No models/policies files found in {directory}", "Configuration Error")
            raise typer.Exit(1)
        return get_default_router_config()

    try:
        return load_router_config(directory)
    except AxcessError as e:
        print_error(e.message, "Configuration Error")
        raise typer.Exit(1) from e


def read_text_argument(value: str) -> str:
    """Return ``value``, or stdin when it is ``-``."""
    if value == "-":
        return sys.stdin.read()
    return value


def routing_options(
    language: str | None,
    tier: str | None,
    temperature: float | None,
    force_model: str | None,
    max_output_tokens: int | None,
) -> RoutingOptions:
    return RoutingOptions(
        language=language,
        tier=tier,
        temperature=temperature,
        force_model=force_model,
        max_output_tokens=max_output_tokens,
    )


def to_jsonable(value: Any) -> Any:
    """Round-trip a dataclass tree through JSON so enums and raw payloads serialize."""
    return json.loads(json.dumps(asdict(value), default=str))


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def print_route(route: RouteResult) -> None:
    decision = route.decision
    print_table(
        create_key_value_table(
            {
                "Alias": decision.alias,
                "Model": f"{decision.provider}/{decision.model}",
                "Max output tokens": route.parameters.max_output_tokens,
                "Temperature": route.parameters.temperature,
                "Estimated input tokens": route.estimated_input_tokens,
                "Fallbacks": ", ".join(f.alias for f in route.fallbacks) or "-",
            },
            "Route Decision",
        )
    )
    print_table(create_rationale_table(route.rationale))


def print_raw_text(text: str) -> None:
    """Print model output without Rich markup or highlighting."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def fail(error: AxcessError) -> NoReturn:
    """Report an error result and exit with status 1.

    Raises:
        typer.Exit: Always.
    """
    title = type(error).__name__
    print_error(error.message, title)
    if isinstance(error, DelegationError) and error.attempts:
        print_table(create_attempts_table(tuple(error.attempts)))
    raise typer.Exit(1)


__all__ = [
    "ConfigDirOption",
    "LanguageOption",
    "TierOption",
    "TemperatureOption",
    "ForceModelOption",
    "MaxTokensOption",
    "JsonOption",
    "ExplainOption",
    "resolve_config",
    "read_text_argument",
    "routing_options",
    "to_jsonable",
    "echo_json",
    "print_route",
    "print_raw_text",
    "fail",
]
