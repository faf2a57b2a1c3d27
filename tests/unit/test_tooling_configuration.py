"""Test that tooling is configured correctly."""

from pathlib import Path
import tomllib

ROOT = Path(__file__).parent.parent.parent


def _tool_config() -> dict:
    return tomllib.loads((ROOT / "pyproject.toml").read_text())["tool"]


def test_ruff_line_length():
    """Test that ruff line length is set to 100."""
    assert _tool_config()["ruff"]["line-length"] == 100


def test_pre_commit_config_exists():
    """Test that .pre-commit-config.yaml exists."""
    assert (ROOT / ".pre-commit-config.yaml").is_file()


def test_mypy_configured():
    """Test that mypy runs in strict mode."""
    assert _tool_config()["mypy"]["strict"] is True


def test_pytest_asyncio_mode():
    """Test that pytest asyncio_mode is set to 'auto'."""
    assert _tool_config()["pytest"]["ini_options"]["asyncio_mode"] == "auto"
