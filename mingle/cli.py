"""CLI interface for mingle."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from mingle import __version__
from mingle.aggregator import SessionAggregator
from mingle.config import CONFIG_ENV_VAR, ConfigLoader
from mingle.connect import ExecReplace, SessionConnector, exec_replace
from mingle.exceptions import MingleError
from mingle.models import SessionCatalog
from mingle.tmux_manager import TmuxManager

# Session names go to stdout; everything else goes to stderr
console = Console()
err_console = Console(stderr=True)


def setup_logging(log_level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def get_aggregator(ctx: click.Context) -> SessionAggregator:
    """Build the aggregator for the config path chosen on the command line."""
    return SessionAggregator(config_loader=ConfigLoader(ctx.obj["config_path"]), tmux=TmuxManager())


def fail(error: Exception) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    envvar=CONFIG_ENV_VAR,
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: ~/.config/mingle/mingle.yaml)",
)
@click.option(
    "--log-level",
    envvar="MINGLE_LOG_LEVEL",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for diagnostics on stderr",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str):
    """Mingle - tmux sessions from tmux, config, git worktrees and zoxide."""
    setup_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command("list")
@click.option("--details", is_flag=True, help="Show source, path and tmuxinator profile")
@click.pass_context
def list_sessions(ctx: click.Context, details: bool):
    """List all available sessions."""
    try:
        catalog = get_aggregator(ctx).get_sessions()
    except MingleError as e:
        fail(e)

    if details:
        display_catalog(catalog)
        return
    for name in catalog.names():
        click.echo(name)


def display_catalog(catalog: SessionCatalog) -> None:
    """Display the catalog as a rich table."""
    table = Table(title=f"SESSIONS: {len(catalog)}")
    table.add_column("Name", style="cyan")
    table.add_column("Source", style="green")
    table.add_column("Path")
    table.add_column("Tmuxinator")

    for session in catalog:
        table.add_row(session.name, session.source.value, session.path or "-", session.tmuxinator or "-")

    console.print(table)


@main.command()
@click.argument("session")
@click.pass_context
def connect(ctx: click.Context, session: str):
    """Connect to a given session, creating it if needed."""
    try:
        aggregator = get_aggregator(ctx)
        outcome = SessionConnector(aggregator).connect(session)
        if isinstance(outcome, ExecReplace):
            exec_replace(outcome)
    except MingleError as e:
        fail(e)


@main.command("config-path")
@click.pass_context
def config_path(ctx: click.Context):
    """Print the config file in use."""
    click.echo(str(ConfigLoader(ctx.obj["config_path"]).config_path))


if __name__ == "__main__":
    main()
