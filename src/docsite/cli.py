"""CLI interface for Docsite.

Command-line tool for serving a documentation site from a content tree.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from docsite.config import Config
from docsite.core.content import ContentTree
from docsite.core.errors import MalformedContentNodeError
from docsite.core.projector import extract_pages
from docsite.core.routing import RouteTable

CONFIG_OPTION_HELP = "Path to configuration file (default: auto-discover docsite.toml)"


@click.group()
def cli() -> None:
    """Docsite - documentation website server for static content trees."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--content-file",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Content tree JSON file (overrides config)",
)
@click.option(
    "--content-dir",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Rendered content directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def serve(
    config_path: Path | None,
    content_file: Path | None,
    content_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the documentation server."""
    from docsite.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        tree_file=content_file,
        content_dir=content_dir,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content tree: {config.content.tree_file}")
    click.echo(f"Content directory: {config.content.content_dir}")
    click.echo(f"Theme storage: {config.theme.storage_file}")

    try:
        run_server(config)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--content-file",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Content tree JSON file (overrides config)",
)
def routes(config_path: Path | None, content_file: Path | None) -> None:
    """Print the route table for the content tree."""
    config = _load_config(config_path).with_overrides(tree_file=content_file)

    try:
        tree = ContentTree.load(config.content.tree_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    table = RouteTable(extract_pages(tree))
    entries = table.routes()
    width = max(len(path) for path, _ in entries)
    for path, target in entries:
        click.echo(f"{path.ljust(width)}  {target}")


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)


def _fail(error: Exception) -> NoReturn:
    prefix = "Malformed content tree" if isinstance(error, MalformedContentNodeError) else "Error"
    click.echo(click.style(f"{prefix}: {error}", fg="red"), err=True)
    sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
