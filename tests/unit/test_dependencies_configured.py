"""Test that dependencies are configured correctly."""

from pathlib import Path
import tomllib


def _pyproject() -> dict:
    root = Path(__file__).parent.parent.parent
    return tomllib.loads((root / "pyproject.toml").read_text())


def _names(deps: list[str]) -> set[str]:
    return {dep.split(">=")[0].split("==")[0].split("[")[0] for dep in deps}


def test_runtime_dependencies_configured():
    """Test that all required runtime dependencies are in pyproject.toml."""
    dep_names = _names(_pyproject()["project"]["dependencies"])

    required_deps = [
        "anthropic",
        "litellm",
        "mcp",
        "pydantic",
        "python-dotenv",
        "pyyaml",
        "rich",
        "structlog",
        "typer",
    ]

    for dep in required_deps:
        assert dep in dep_names, f"Required dependency '{dep}' not found in pyproject.toml"


def test_test_extra_configured():
    """Test that the test extra carries the pytest stack."""
    test_deps = _names(_pyproject()["project"]["optional-dependencies"]["test"])

    for dep in ["pytest", "pytest-asyncio", "pytest-cov"]:
        assert dep in test_deps, f"Test dependency '{dep}' not found in pyproject.toml"


def test_console_script():
    """Test that the axcess entry point is declared."""
    assert _pyproject()["project"]["scripts"]["axcess"] == "axcess:main"
