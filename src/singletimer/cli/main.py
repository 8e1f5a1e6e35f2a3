"""CLI entry point for singletimer.

Uses Click to expose the ``singletimer`` command group: ``serve`` runs the
HTTP API, the remaining subcommands talk to a running server.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, TypeVar

import click

import singletimer
from singletimer.cli.client import TimerApiError, TimerClient
from singletimer.config import Settings, configure_logging
from singletimer.core.duration import Duration

T = TypeVar("T")


def _run(action: Callable[[TimerClient], T]) -> T:
    """Execute *action* with a client, converting API errors to a CLI error.

    On ``TimerApiError`` the message is printed to stderr and the process
    exits with code 1.
    """
    api_url = click.get_current_context().find_root().obj["api_url"]
    try:
        with TimerClient(api_url) as client:
            return action(client)
    except TimerApiError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _describe(state: dict[str, Any]) -> str:
    """Render a timer state as a one-line summary."""
    remaining = Duration(state["currentRemainingSeconds"]).format()
    status = state["status"]
    if status == "RUNNING":
        return f"Running: {remaining} remaining"
    if status == "PAUSED":
        return f"Paused: {remaining} remaining"
    if status == "COMPLETED":
        return "Completed"
    return "Stopped"


@click.group()
@click.version_option(version=singletimer.__version__, prog_name="singletimer")
@click.option(
    "--api-url",
    envvar="TIMER_API_URL",
    default=None,
    help="Base URL of the timer API.",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str | None) -> None:
    """singletimer: a single countdown timer served over HTTP."""
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url if api_url is not None else Settings.from_env().api_url


@cli.command()
@click.option("--host", default=None, help="Bind host (default: TIMER_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (default: TIMER_PORT).")
@click.option("--log-level", default=None, help="Log level (default: TIMER_LOG_LEVEL).")
def serve(host: str | None, port: int | None, log_level: str | None) -> None:
    """Run the timer HTTP API."""
    import uvicorn

    from singletimer.api.app import create_app

    settings = Settings.from_env()
    level = (log_level or settings.log_level).upper()
    configure_logging(level)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_level=level.lower(),
    )


@cli.command()
@click.argument("seconds", type=int)
def start(seconds: int) -> None:
    """Start the timer for SECONDS seconds."""
    state = _run(lambda client: client.start(seconds))
    click.echo(f"Timer started: {Duration(state['durationSeconds']).format()}")


@cli.command()
def status() -> None:
    """Show the current timer status."""
    state = _run(lambda client: client.state())
    click.echo(_describe(state))
    sys.exit(0 if state["status"] in ("RUNNING", "PAUSED") else 1)


@cli.command()
def pause() -> None:
    """Pause the running timer."""
    state = _run(lambda client: client.pause())
    click.echo(f"Timer paused at {Duration(state['remainingSeconds']).format()} remaining")


@cli.command()
def resume() -> None:
    """Resume a paused timer."""
    state = _run(lambda client: client.resume())
    click.echo(f"Timer resumed: {Duration(state['currentRemainingSeconds']).format()} remaining")


@cli.command()
def reset() -> None:
    """Stop and clear the timer."""
    _run(lambda client: client.reset())
    click.echo("Timer reset")
