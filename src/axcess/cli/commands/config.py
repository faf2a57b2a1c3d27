"""Config command group for axcess.

Create, display and validate the models catalog and policy files.
"""

from typing import Annotated

import typer

from axcess.cli.commands.common import ConfigDirOption, resolve_config
from axcess.cli.formatters.panels import print_error, print_info, print_success
from axcess.cli.formatters.tables import create_key_value_table, create_table, print_table
from axcess.config import config_exists, create_default_config, get_config_dir, load_router_config
from axcess.core.errors import AxcessError

app = typer.Typer(
    name="config",
    help="Manage axcess configuration.",
    no_args_is_help=True,
)


@app.command()
def init(
    config_dir: ConfigDirOption = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite existing configuration files.")
    ] = False,
) -> None:
    """Write the built-in catalog and policies to the config directory."""
    try:
        models_path, policies_path = create_default_config(config_dir, overwrite=force)
    except AxcessError as e:
        print_error(e.message, "Configuration Error")
        raise typer.Exit(1) from e
    print_success(f"Created {models_path}\nCreated {policies_path}", "Configuration Initialized")


@app.command()
def show(
    config_dir: ConfigDirOption = None,
) -> None:
    """Display aliases, models and policies in effect.

    Uses the built-in defaults when no configuration files exist.
    """
    directory = config_dir or get_config_dir()
    if config_dir is None and not config_exists(directory):
        print_info(f"No configuration in {directory}; showing built-in defaults.")
    config = resolve_config(config_dir)

    models = create_table("Models")
    models.add_column("Key", style="cyan", no_wrap=True)
    models.add_column("Aliases")
    models.add_column("Max output", justify="right")
    models.add_column("Cap (default/hard)", justify="right")
    models.add_column("Price in/out")
    for key, spec in config.catalog.models.items():
        aliases = [alias for alias, target in config.catalog.aliases.items() if target == key]
        models.add_row(
            key,
            ", ".join(aliases) or "-",
            str(spec.max_output_tokens),
            f"{spec.cap.default}/{spec.cap.hard or '-'}",
            f"{spec.pricing.input:g}/{spec.pricing.output:g} {spec.pricing.currency or 'USD'}",
        )
    print_table(models)

    policies = config.policies
    print_table(
        create_key_value_table(
            {
                "Default alias": policies.routing.default_alias,
                "Token buckets": ", ".join(
                    f"{b.alias}[{b.min_prompt_tokens or 0}, {b.max_prompt_tokens or 'inf'})"
                    for b in policies.routing.token_buckets
                )
                or "-",
                "Fallbacks": "; ".join(
                    f"{alias} -> {', '.join(chain)}"
                    for alias, chain in policies.routing.fallbacks.items()
                )
                or "-",
                "Default cap": policies.caps.default,
                "Tier caps": ", ".join(f"{t}={c}" for t, c in policies.caps.tiers.items()) or "-",
                "Default temperature": policies.temperatures.default,
                "Domain temperatures": ", ".join(
                    f"{d}={t}" for d, t in policies.temperatures.per_domain.items()
                )
                or "-",
            },
            "Policies",
        )
    )


@app.command()
def validate(
    config_dir: ConfigDirOption = None,
) -> None:
    """Validate the configuration files.

    Reports every failing field path.
    """
    directory = config_dir or get_config_dir()
    if not config_exists(directory):
        print_error(
            f"No configuration in {directory}. Run 'axcess config init' first.",
            "Configuration Error",
        )
        raise typer.Exit(1)

    try:
        config = load_router_config(directory)
    except AxcessError as e:
        print_error(e.message, "Invalid Configuration")
        raise typer.Exit(1) from e

    print_success(
        f"{len(config.catalog.models)} models, {len(config.catalog.aliases)} aliases",
        "Configuration Valid",
    )


__all__ = ["app"]
