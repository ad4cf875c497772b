"""Tests for running FlightPlan as a module (`python -m flightplan`)."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_module_help_exits_zero() -> None:
    """Running with --help should exit cleanly with code 0."""
    with patch("sys.argv", ["flightplan", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("flightplan", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_subcommand_help_exits_zero() -> None:
    """Invoking a subcommand's help via module entrypoint should exit 0."""
    with patch("sys.argv", ["flightplan", "query", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("flightplan", run_name="__main__")
    assert exc_info.value.code == 0
