"""Response builders: calendar embed, error embed, help embed."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import discord

from ffbot.bot.commands import HELP_ENTRIES

ATTACHMENT_NAME = "forex-calendar.png"

PRIMARY_COLOR = discord.Colour(0x0099FF)
ERROR_COLOR = discord.Colour(0xFF0000)

TODAY_ERROR_TEXT = "There was an error fetching today's Forex events. Please try again later."
CALENDAR_ERROR_TEXT = (
    "There was an error fetching the ForexFactory calendar. Please try again later."
)


def format_date(moment: datetime) -> str:
    """``Monday, October 19, 2026``"""
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


def format_time(moment: datetime) -> str:
    """``3:04:05 PM``"""
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment:%M:%S} {moment:%p}"


def calendar_title(days: int) -> str:
    if days == 1:
        return "Today's Economic Events (EST)"
    if days == 7:
        return "Weekly Economic Calendar (EST)"
    return "ForexFactory Economic Calendar (EST)"


def calendar_description(days: int, now: datetime) -> str:
    date = format_date(now)
    if days == 1:
        return (
            f"Economic events for today ({date}) from ForexFactory\n"
            f"Last updated: {format_time(now)}"
        )
    if days == 7:
        return f"Economic events for the week from ForexFactory\nLast updated: {date}"
    return f"Economic events for the next {days} days from ForexFactory\nLast updated: {date}"


def build_calendar_message(
    screenshot: Optional[Path],
    days: int,
    calendar_url: str,
    now: Optional[datetime] = None,
) -> Tuple[discord.Embed, Optional[discord.File]]:
    """Return the embed and attachment for a captured calendar.

    A missing screenshot yields an error embed and no attachment.
    """
    now = now or datetime.now().astimezone()

    if screenshot is None or not Path(screenshot).exists():
        embed = discord.Embed(
            title="ForexFactory Calendar",
            description="Failed to capture calendar screenshot.",
            colour=ERROR_COLOR,
            timestamp=now,
        )
        return embed, None

    size_kb = Path(screenshot).stat().st_size / 1024
    embed = discord.Embed(
        title=calendar_title(days),
        description=calendar_description(days, now),
        colour=PRIMARY_COLOR,
        url=calendar_url,
        timestamp=now,
    )
    embed.set_image(url=f"attachment://{ATTACHMENT_NAME}")
    embed.set_footer(text=f"ForexFactory Calendar in EST timezone | Image size: {size_kb:.1f} KB")

    attachment = discord.File(
        str(screenshot),
        filename=ATTACHMENT_NAME,
        description="ForexFactory Economic Calendar (EST timezone)",
    )
    return embed, attachment


def build_help_embed() -> discord.Embed:
    embed = discord.Embed(
        title="ForexFactory Calendar Bot - Help",
        description="Commands available:",
        colour=PRIMARY_COLOR,
    )
    for name, value in HELP_ENTRIES:
        embed.add_field(name=name, value=value, inline=False)
    return embed
