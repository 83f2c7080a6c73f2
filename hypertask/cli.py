"""``hypertask`` command line."""

from __future__ import annotations

import logging

import click
import uvicorn

from hypertask.config import Settings, configure_logging
from hypertask.main import create_app

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """Hypertask: an htmx task tracker served from memory."""


@cli.command("serve")
@click.option("--host", default=None, help="Host to bind to. Defaults to HYPERTASK_HOST or 127.0.0.1.")
@click.option("--port", default=None, type=int, help="Port to bind to. Defaults to HYPERTASK_PORT or 8070.")
@click.option("--no-seed", is_flag=True, help="Start with an empty task list.")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level. Defaults to HYPERTASK_LOG_LEVEL or INFO.",
)
def serve_cmd(host: str | None, port: int | None, no_seed: bool, log_level: str | None) -> None:
    """Run the task server until interrupted."""
    settings = Settings.from_env()
    if host:
        settings.host = host
    if port:
        settings.port = port
    if no_seed:
        settings.seed = False
    if log_level:
        settings.log_level = log_level.upper()

    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Serving tasks on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main() -> None:
    cli()
