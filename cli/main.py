"""ForexFactory calendar bot CLI: entry-point for running and manual captures.

Usage:
    python cli/main.py --help

Commands:
    run       → start the Discord bot
    capture   → take one calendar screenshot and print its path
    url       → print the calendar URL a capture would load
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from ffbot.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import typer

from ffbot.capture import CaptureError, CaptureRequest, build_calendar_url, capture_calendar
from ffbot.capture.models import TodayMarkers
from ffbot.config import settings
from ffbot.logging_setup import configure_logging

app = typer.Typer(
    name="ffbot",
    help="ForexFactory calendar bot CLI.",
    no_args_is_help=True,
)


@app.command("run")
def run() -> None:
    """Start the Discord bot and respond to calendar commands."""
    if not settings.discord_token:
        typer.echo("[run] DISCORD_TOKEN is not set.")
        raise typer.Exit(1)

    from ffbot.bot.client import run_bot

    configure_logging(settings.log_level)
    typer.echo("[run] Starting bot …")
    run_bot(settings)


@app.command("capture")
def capture(
    days: Optional[int] = typer.Option(None, help="Number of days to show; defaults to FF_DEFAULT_DAYS, clamped to FF_MAX_DAYS."),
) -> None:
    """Take one calendar screenshot and print the file path."""
    configure_logging(settings.log_level)
    typer.echo(f"[capture] Capturing {CaptureRequest.create(days, settings).days} day(s) …")
    try:
        path = capture_calendar(days, settings)
    except CaptureError as exc:
        typer.echo(f"[capture] Failed: {exc}")
        raise typer.Exit(1)
    typer.echo(f"[capture] Saved {path}")


@app.command("url")
def url(
    days: Optional[int] = typer.Option(None, help="Number of days to show; defaults to FF_DEFAULT_DAYS."),
) -> None:
    """Print the calendar URL a capture would navigate to."""
    request = CaptureRequest.create(days, settings)
    markers = TodayMarkers.from_datetime(datetime.now(ZoneInfo(settings.calendar_timezone)))
    typer.echo(build_calendar_url(settings.calendar_url, request, markers))


if __name__ == "__main__":
    app()
