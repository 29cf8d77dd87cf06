"""Command-line interface for the VPN client.

Routes status, up, down and history to the connection controller. Running
without a command prints usage; an unknown command is reported, not failed.
"""

import logging
import sys
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .config import ClientConfig
from .connectors import build_connector
from .constants import COMMAND_NAMES, PROGRAM_NAME
from .engine import ConnectionController
from .events import EventStore
from .exceptions import VPNClientError
from .query import HistoryFilter
from .timeutil import parse_date_reference

console = Console()
err_console = Console(stderr=True)


def echo(line: str) -> None:
    """Print one line of command output verbatim."""
    console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def usage_lines() -> list[str]:
    """Usage block printed when no command is given."""
    return [f"Usage: {PROGRAM_NAME} <command> [options]", "Commands:"] + [
        f"  {name}" for name in COMMAND_NAMES
    ]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _fail(ctx: click.Context, error: Exception) -> None:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    ctx.exit(1)


def _get_controller(ctx: click.Context, with_connector: bool = False) -> ConnectionController:
    """Create controller instance from the resolved config.

    The connector is only built for commands that change the tunnel, so a
    broken connector setting never blocks status or history.
    """
    config: ClientConfig = ctx.obj["config"]
    return ConnectionController(
        EventStore(config.events_file),
        build_connector(config) if with_connector else None,
        echo=echo,
    )


def _parse_date_option(ctx: click.Context, param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_date_reference(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _unknown_command(name: str) -> click.Command:
    def callback() -> None:
        echo(f"Unknown command: {name}")

    return click.Command(
        name,
        callback=callback,
        add_help_option=False,
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )


class VPNClientGroup(click.Group):
    """Command group that reports unknown commands instead of failing."""

    def resolve_command(self, ctx, args):
        if self.get_command(ctx, args[0]) is None:
            return args[0], _unknown_command(args[0]), args[1:]
        return super().resolve_command(ctx, args)


@click.group(cls=VPNClientGroup, invoke_without_command=True)
@click.option(
    "--events-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the events file (env: VPN_CLIENT_EVENTS_FILE)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log diagnostics to stderr")
@click.pass_context
def cli(ctx, events_file, verbose):
    """vpn-client - track and control a VPN tunnel."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = ClientConfig.from_env(events_file=events_file)
    except VPNClientError as e:
        _fail(ctx, e)

    if ctx.invoked_subcommand is None:
        for line in usage_lines():
            echo(line)


@cli.command()
@click.pass_context
def status(ctx):
    """Show the current tunnel status."""
    try:
        _get_controller(ctx).status()
    except VPNClientError as e:
        _fail(ctx, e)


@cli.command()
@click.pass_context
def up(ctx):
    """Bring the tunnel up."""
    try:
        _get_controller(ctx, with_connector=True).up()
    except VPNClientError as e:
        _fail(ctx, e)


@cli.command()
@click.pass_context
def down(ctx):
    """Bring the tunnel down."""
    try:
        _get_controller(ctx, with_connector=True).down()
    except VPNClientError as e:
        _fail(ctx, e)


@cli.command()
@click.option("-S", "--status", "status_filter", help="Only events with this status (e.g. UP)")
@click.option("-f", "--from", "date_from", callback=_parse_date_option, help="From date, inclusive (yyyy-MM-dd)")
@click.option("-t", "--to", "date_to", callback=_parse_date_option, help="To date, inclusive (yyyy-MM-dd)")
@click.option("-s", "--sort", type=click.Choice(["asc", "desc"]), default="asc", show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def history(ctx, status_filter, date_from, date_to, sort, as_json):
    """Show status history, filtered and sorted."""
    history_filter = HistoryFilter(
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        sort=sort,
    )
    try:
        _get_controller(ctx).history(history_filter, as_json=as_json)
    except VPNClientError as e:
        _fail(ctx, e)


if __name__ == "__main__":
    cli()
