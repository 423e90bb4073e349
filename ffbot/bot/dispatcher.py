"""Transport-agnostic command handling.

``Dispatcher.handle`` takes anything shaped like a ``discord.Message``
(``content``, ``author.bot``, ``channel.send``, ``channel.typing``), routes
it through the command table and relays the capture result.  Captures run in
a worker thread because the pipeline drives Playwright's sync API; two
commands arriving together each get their own thread and browser.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, Callable, Optional

import discord

from ffbot.bot.commands import GROUP_TODAY, HELP, Command, match_command
from ffbot.bot.messages import (
    CALENDAR_ERROR_TEXT,
    TODAY_ERROR_TEXT,
    build_calendar_message,
    build_help_embed,
)
from ffbot.capture import CaptureError, capture_calendar
from ffbot.config import Settings

logger = logging.getLogger(__name__)

_ACK_TEXT = {
    GROUP_TODAY: "Fetching today's Forex events...",
}
_DEFAULT_ACK = "Fetching ForexFactory calendar..."

CaptureFn = Callable[..., Path]


class Dispatcher:
    def __init__(
        self,
        settings: Settings,
        capture: CaptureFn = capture_calendar,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings
        self._capture = capture
        self._executor = executor

    async def handle(self, message: Any) -> Optional[Command]:
        """Respond to *message* if it is a known command.

        Returns the matched command (``None`` when the message was ignored)
        so callers and tests can see what happened.
        """
        if getattr(message.author, "bot", False):
            return None

        command = match_command(message.content)
        if command is None:
            return None

        logger.info("Handling %r from %s", message.content, message.author)
        if command.action == HELP:
            await message.channel.send(embed=build_help_embed())
        else:
            await self._relay_capture(message.channel, command)
        return command

    async def capture(self, days: int) -> Path:
        """Run the pipeline off the event loop."""
        loop = asyncio.get_running_loop()
        call = functools.partial(self._capture, days, self.settings)
        return await loop.run_in_executor(self._executor, call)

    async def _relay_capture(self, channel: Any, command: Command) -> None:
        error_text = TODAY_ERROR_TEXT if command.group == GROUP_TODAY else CALENDAR_ERROR_TEXT

        try:
            async with channel.typing():
                await channel.send(_ACK_TEXT.get(command.group, _DEFAULT_ACK))
                path = await self.capture(command.days)
        except (CaptureError, discord.DiscordException):
            logger.exception("Error handling %s command (days=%s)", command.group, command.days)
            await channel.send(error_text)
            return

        embed, attachment = build_calendar_message(path, command.days, self.settings.calendar_url)
        try:
            if attachment is not None:
                await channel.send(embed=embed, file=attachment)
                logger.info("Calendar sent to channel %s", getattr(channel, "name", channel))
            else:
                await channel.send(embed=embed)
                logger.info("Error embed sent to channel %s", getattr(channel, "name", channel))
        except discord.DiscordException:
            logger.exception("Error sending calendar to channel")
