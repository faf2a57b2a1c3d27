"""Test main entry point."""

import importlib.util
from pathlib import Path
import re

from typer.testing import CliRunner

import axcess
from axcess import main
from axcess.cli.main import app

runner = CliRunner()


def test_version_exists():
    """Test that __version__ is defined and is a valid semver string."""
    assert hasattr(axcess, "__version__")
    assert re.match(r"^\d+\.\d+\.\d+$", axcess.__version__)


def test_main_invokes_cli():
    """Test that the Typer app behind main() answers --help."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "axcess" in result.output


def test_main_is_callable():
    """Test that main is a callable function."""
    assert callable(main)


def test_main_module_execution():
    """Test that the __main__ module can be loaded."""
    root = Path(__file__).parent.parent.parent
    main_py = root / "src" / "axcess" / "__main__.py"

    assert main_py.exists()
    spec = importlib.util.spec_from_file_location("axcess.__main__", main_py)
    assert spec is not None
    assert spec.loader is not None
