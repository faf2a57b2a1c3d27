"""Integration tests for entry point execution."""

from contextlib import suppress
from io import StringIO
import runpy
import sys
from unittest.mock import patch


def test_main_module_entry_point():
    """Running the package as a module without args prints the help text.

    Help may land on stdout or stderr; both are captured.
    """
    with (
        patch.object(sys, "argv", ["axcess"]),
        patch("sys.stdout", new=StringIO()) as fake_out,
        patch("sys.stderr", new=StringIO()) as fake_err,
        suppress(SystemExit),
    ):
        runpy.run_module("axcess", run_name="__main__", alter_sys=True)

    output = fake_out.getvalue() + fake_err.getvalue()
    assert "axcess" in output or "Usage" in output
