"""Discord gateway client that feeds messages to the :class:`Dispatcher`."""

from __future__ import annotations

import logging

import discord

from ffbot.bot.dispatcher import Dispatcher
from ffbot.config import Settings

logger = logging.getLogger(__name__)


def build_intents() -> discord.Intents:
    """Guilds, guild messages and message content; nothing else."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class CalendarBot(discord.Client):
    """Responds to calendar commands; automatic posting is not enabled."""

    def __init__(self, settings: Settings, dispatcher: Dispatcher | None = None) -> None:
        super().__init__(intents=build_intents())
        self.settings = settings
        self.dispatcher = dispatcher or Dispatcher(settings)

    async def on_ready(self) -> None:
        logger.info("Logged in as %s", self.user)

    async def on_message(self, message: discord.Message) -> None:
        await self.dispatcher.handle(message)

    async def on_error(self, event_method: str, *args, **kwargs) -> None:
        logger.exception("Discord client error in %s", event_method)


def run_bot(settings: Settings) -> None:
    """Log in with ``settings.discord_token`` and block until disconnected."""
    bot = CalendarBot(settings)
    bot.run(settings.discord_token, log_handler=None)
