"""Shared fixtures for the dsakit test suite."""

import pytest

from dsakit.config import reset_config

DSAKIT_ENV_VARS = (
    "DSAKIT_RENDER_EXECUTABLE",
    "DSAKIT_RENDER_FORMAT",
    "DSAKIT_RENDER_KEEP_DOT",
    "DSAKIT_LOG_LEVEL",
    "DSAKIT_JSON_LOGS",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test with default configuration and no config file in reach."""
    for name in DSAKIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()
