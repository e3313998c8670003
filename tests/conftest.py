"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest
from hypothesis import Verbosity, settings

from bignumber import cli, runtime
from bignumber.sequences import reset_default_memo

settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Fresh workspace, runtime settings, memo and history for every test."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("BIGNUMBER_HOME", str(ws))
    runtime.reset()
    reset_default_memo()
    cli.clear_history()
    yield ws
    runtime.reset()
