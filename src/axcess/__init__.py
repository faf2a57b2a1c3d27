"""axcess - policy-driven LLM request router.

Decides which backend model serves a text-generation request, with which
parameters and in which fallback order, then executes the decision
against pluggable provider handlers.

Example:
    # Using CLI
    axcess route "Explain this stack trace"
    axcess run --tier pro "Summarize the release notes"

    # Using Python
    from axcess.config import load_router_config
    from axcess.delegate import Delegate
    from axcess.providers import build_registry_from_env

    delegate = Delegate(load_router_config(), build_registry_from_env())
"""

__version__ = "0.1.0"

__all__ = ["__version__", "main"]


def main() -> None:
    """Main entry point for the axcess CLI."""
    from axcess.cli.main import app

    app()
