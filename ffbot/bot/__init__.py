"""Bot package — chat commands routed to the capture pipeline."""

from ffbot.bot.commands import Command, match_command
from ffbot.bot.dispatcher import Dispatcher

__all__ = ["Command", "Dispatcher", "match_command"]
