"""Route command: show the routing decision for a prompt without calling a provider."""

from typing import Annotated

import typer

from axcess.cli.commands.common import (
    ConfigDirOption,
    ForceModelOption,
    JsonOption,
    LanguageOption,
    MaxTokensOption,
    TemperatureOption,
    TierOption,
    echo_json,
    fail,
    print_route,
    read_text_argument,
    resolve_config,
    routing_options,
    to_jsonable,
)
from axcess.routing import Router
from axcess.tools.base import build_route_request


def route(
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
) -> None:
    """Print the model, parameters and fallbacks a prompt would be routed to."""
    config = resolve_config(config_dir)
    options = routing_options(language, tier, temperature, force_model, max_output_tokens)
    request = build_route_request(read_text_argument(prompt), options, domain=domain)

    result = Router(config).decide(request)
    if result.is_err:
        fail(result.error)

    if as_json:
        echo_json(to_jsonable(result.value))
    else:
        print_route(result.value)


__all__ = ["route"]
