"""
tests/test_cli.py - Command line entry point
"""
import logging

import pytest
import uvicorn
from fastapi import FastAPI
from typer.testing import CliRunner

from pricetracker import __version__
from pricetracker.cli import app

runner = CliRunner()


@pytest.fixture
def served(monkeypatch):
    """Capture uvicorn.run calls instead of starting a server."""
    calls = []

    def fake_run(application, **kwargs):
        calls.append((application, kwargs))

    monkeypatch.setattr(uvicorn, "run", fake_run)
    yield calls
    # configure_logging attaches handlers to the app logger; drop them
    app_logger = logging.getLogger("pricetracker")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


def test_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "Price Tracker" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_serve_uses_config_and_options(served, isolated_home):
    config_file = isolated_home / "config.toml"
    config_file.write_text('[server]\nhost = "0.0.0.0"\nport = 9000\n')

    result = runner.invoke(app, ["--config", str(config_file), "serve", "--port", "9100"])

    assert result.exit_code == 0, result.output
    application, kwargs = served[0]
    assert isinstance(application, FastAPI)
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9100
    assert kwargs["workers"] == 1
    assert sorted(r.name for r in application.state.store.list_items()) == ["shoes", "socks"]


def test_serve_writes_log_file(served, isolated_home):
    log_file = isolated_home / "logs" / "serve.log"

    result = runner.invoke(
        app,
        ["--debug", "--log-file", str(log_file), "--config", str(isolated_home / "none.toml"), "serve"],
    )

    assert result.exit_code == 0, result.output
    assert served[0][1]["log_level"] == "debug"
    assert log_file.exists()
    assert "Serving 2 seeded items" in log_file.read_text()


def test_serve_with_invalid_config_exits_cleanly(served, isolated_home):
    result = runner.invoke(
        app,
        ["--config", str(isolated_home / "none.toml"), "serve", "--port", "70000"],
    )

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert served == []
