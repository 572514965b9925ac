"""CLI entry point for the Roster API server."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
import uvicorn

from roster import __version__
from roster.api.app import create_app
from roster.config import ConfigError, RosterConfig, find_config, load_config
from roster.logging import redact_url, setup_logging
from roster.store import StoreError, StudentStore


def _load(config_path: Path | None) -> RosterConfig:
    if config_path is None:
        config_path = find_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="roster")
def main() -> None:
    """Roster - student records API."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to roster.yaml (auto-detected if not specified)",
)
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default: from config)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development only)")
def serve(config_path: Path | None, host: str | None, port: int | None, reload: bool) -> None:
    """Run the HTTP API."""
    config = _load(config_path)
    if host is not None:
        config.host = host
    if port is not None:
        config.port = port

    setup_logging(log_dir=config.log_dir, level=config.log_level)
    click.echo(f"Serving Roster API on http://{config.host}:{config.port}")

    if reload:
        # The reloader imports the factory by name, so settings travel via the environment.
        os.environ["ROSTER_DATABASE_URL"] = config.database_url
        uvicorn.run(
            "roster.api.app:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=True,
        )
        return

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to roster.yaml (auto-detected if not specified)",
)
def init_db(config_path: Path | None) -> None:
    """Create the students table if it does not exist."""
    config = _load(config_path)
    try:
        store = StudentStore(config.database_url)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    store.close()
    click.echo(f"Students table ready in {redact_url(config.database_url)}")


if __name__ == "__main__":
    main()
