"""
Root pytest configuration file for atlassian-cli tests.
"""

import os
from unittest.mock import patch

import pytest

from atlassian_cli.config import ENV_VARS, ResolvedConfig


@pytest.fixture
def make_config():
    """Factory for ResolvedConfig instances with valid credentials."""

    def _make(**overrides):
        values = {
            "domain": "test.atlassian.net",
            "email": "user@example.com",
            "token": "test_token_value",
        }
        values.update(overrides)
        return ResolvedConfig(**values)

    return _make


@pytest.fixture
def config(make_config):
    """A ResolvedConfig without filters, exclusions or delays."""
    return make_config(rate_limit_delay_ms=0)


@pytest.fixture
def clean_env():
    """Remove every atlassian-cli variable from the process environment."""
    names = [*ENV_VARS.values(), "ATLASSIAN_CLI_VERBOSE", "ATLASSIAN_CLI_VERY_VERBOSE"]
    cleaned = {k: v for k, v in os.environ.items() if k not in names}
    with patch.dict(os.environ, cleaned, clear=True):
        yield


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the global config at a temporary home and run from an empty cwd."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return home
