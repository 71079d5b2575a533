"""CLI entry point for malstream."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import replace

import click

from malstream.aggregator import aggregate
from malstream.config import Config
from malstream.errors import MalStreamError
from malstream.models import ListRequest

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    default="config.json",
    show_default=True,
    help="Path to config.json",
)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


@click.group()
def main() -> None:
    """malstream: MyAnimeList list overlay for OBS."""


@main.command()
@_config_option
@click.option("--host", default=None, help="Interface to bind")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on")
def serve(config_path: str, host: str | None, port: int | None) -> None:
    """Run the overlay API server."""
    import uvicorn

    from malstream.server import create_app

    config = Config.load(config_path)
    if host:
        config = replace(config, host=host)
    if port:
        config = replace(config, port=port)
    _setup_logging(config.debug)

    click.echo(f"malstream server running on http://{config.host}:{config.port}")
    click.echo(f"Username: {config.username}")
    if not config.has_identity:
        click.echo("Warning: no username configured, set malUsername in config.json", err=True)
    click.echo("Make sure your list is set to PUBLIC on MyAnimeList!")
    if config.debug:
        click.echo("Debug logging is ENABLED")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )


@main.command()
@_config_option
@click.option("--username", "-u", default=None, help="MyAnimeList username (overrides config)")
@click.option("--status", "-s", default="ALL", show_default=True, help="List status")
@click.option(
    "--media",
    "-m",
    type=click.Choice(["manga", "anime"]),
    default="manga",
    show_default=True,
)
@click.option("--mixed", is_flag=True, help="Merge manga and anime lists")
@click.option(
    "--sort",
    type=click.Choice(["default", "title", "status", "progress", "random"]),
    default="default",
    show_default=True,
)
@click.option("--speed", type=int, default=None, help="Override scroll speed")
def fetch(
    config_path: str,
    username: str | None,
    status: str,
    media: str,
    mixed: bool,
    sort: str,
    speed: int | None,
) -> None:
    """Scrape once and print the overlay JSON payload."""
    config = Config.load(config_path)
    if username:
        config = replace(config, username=username)
    _setup_logging(config.debug)

    request = ListRequest(status=status, media=media, mixed=mixed, sort=sort, speed=speed)
    try:
        result = asyncio.run(aggregate(request, config))
    except MalStreamError as e:
        click.echo(json.dumps({"error": str(e)}), err=True)
        sys.exit(1)

    click.echo(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
