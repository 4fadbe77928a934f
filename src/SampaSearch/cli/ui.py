"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from SampaSearch.cli.runner import CommandRunner
from SampaSearch.config import DEFAULT_CONFIG_PATH, load_config


@click.group(help="SampaSearch: search São Paulo council bills from the terminal.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config, so
    ``backend.base_url_env`` can point at a value defined there.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("search")
@click.argument("query", nargs=-1, required=True)
@click.option("--pages", type=click.IntRange(min=1), default=None, help="Pages to load (default: display.max_pages).")
@click.pass_context
def search_cmd(ctx: click.Context, query: tuple[str, ...], pages: int | None) -> None:
    """Search once and print results.

    Raises:
        click.Abort: When the search fails.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_search(action=ctx.command.name, query=" ".join(query), max_pages=pages)


@cli.command("interactive")
@click.pass_context
def interactive_cmd(ctx: click.Context) -> None:
    """Start an interactive search session reading commands from stdin."""
    runner = CommandRunner(ctx.obj)
    runner.run_interactive(action=ctx.command.name, stream=sys.stdin)
