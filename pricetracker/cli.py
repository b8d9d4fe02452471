"""Price Tracker CLI.

Commands:
- serve: Run the HTTP price store
- version: Show the installed version
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from pricetracker import __version__
from pricetracker.config import load_config
from pricetracker.errors import apply_error_handling
from pricetracker.logging import LoggingMode, configure_logging, logger

app = typer.Typer(
    name="pricetrack",
    help="Price Tracker - concurrent in-memory item price store",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Log to specified file"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to config file (default: ~/.pricetrack/config.toml)",
    ),
):
    """Price Tracker - concurrent in-memory item price store."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["log_file"] = log_file
    ctx.obj["config_file"] = config_file


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, help="Host to bind (default from config)"),
    port: Optional[int] = typer.Option(None, help="Port to bind (default from config)"),
):
    """Serve the price store over HTTP."""
    import uvicorn

    from pricetracker.api import create_app

    overrides: Dict[str, Any] = {}
    if host is not None:
        overrides.setdefault("server", {})["host"] = host
    if port is not None:
        overrides.setdefault("server", {})["port"] = port

    config = load_config(config_file=ctx.obj["config_file"], overrides=overrides)

    debug = ctx.obj["debug"]
    mode = (
        LoggingMode.DEVELOPMENT
        if debug or os.environ.get("DEBUG") == "1"
        else LoggingMode.PRODUCTION
    )
    configure_logging(config, mode=mode, log_file=ctx.obj["log_file"], debug=debug)

    logger.info(f"Serving {len(config.seed_items)} seeded items on http://{config.server.host}:{config.server.port}")
    uvicorn.run(
        create_app(config=config),
        host=config.server.host,
        port=config.server.port,
        workers=1,
        log_level="debug" if debug else "info",
    )


@app.command()
def version():
    """Show the installed version."""
    typer.echo(f"pricetracker {__version__}")


apply_error_handling(app)
