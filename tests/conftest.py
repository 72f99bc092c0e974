"""Shared test fixtures for Cypher Tool."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from typer.testing import CliRunner

from cypher_tool.cli.main import app


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner):
    """Invoke the CLI app with the given arguments."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_env(monkeypatch, temp_dir):
    """Clear connection env vars and point the default config at an empty dir."""
    for var in (
        "NEO4J_URI",
        "NEO4J_USERNAME",
        "NEO4J_PASSWORD",
        "NEO4J_DATABASE",
        "CYPHER_PROFILE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "cypher_tool.core.config.DEFAULT_CONFIG_PATH", temp_dir / "missing.toml"
    )
    return temp_dir
