"""Typer application: the ``loadtarget`` command."""

from __future__ import annotations

import typer

from loadtarget import __version__
from loadtarget.config import DEFAULT_BIND, build_config
from loadtarget.errors import LoadTargetError
from loadtarget.log import setup_logging
from loadtarget.main import create_app
from loadtarget.server import serve

app = typer.Typer(
    name="loadtarget",
    help="HTTP target with synthetic latency, errors and CPU load.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"loadtarget {__version__}")
        raise typer.Exit


@app.command()
def main(
    bind: str = typer.Option(
        DEFAULT_BIND,
        "-bind",
        "--bind",
        help="The socket to bind to.",
    ),
    h2c: bool = typer.Option(
        False,
        "-h2c",
        "--h2c",
        help="Enable h2c (http/2 over tcp) protocol.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Emit logs as JSON lines.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Serve the synthetic endpoints and Prometheus metrics."""
    logger = setup_logging(json_format=log_json)
    try:
        config = build_config(bind, h2c=h2c, verbose=verbose, json_logs=log_json)
        setup_logging(config.log_level, json_format=log_json)
        serve(create_app(), config)
    except LoadTargetError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt:
        logger.info("shutting down")
