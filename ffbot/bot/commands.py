"""Declarative chat-command table.

Rules are evaluated top to bottom against the lower-cased, stripped message;
the first rule that matches decides.  Keeping routing as data means it can be
tested without any chat transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

HELP = "help"
CAPTURE = "capture"

# Which acknowledgement / error wording a capture command uses.
GROUP_TODAY = "today"
GROUP_CALENDAR = "calendar"


@dataclass(frozen=True)
class Command:
    """Outcome of matching one message."""

    action: str
    days: Optional[int] = None
    group: str = GROUP_CALENDAR


@dataclass(frozen=True)
class Rule:
    predicate: Callable[[str], bool]
    command: Command


def _exact(*names: str) -> Callable[[str], bool]:
    return lambda text: text in names


def _calendar(keyword: Optional[str] = None) -> Callable[[str], bool]:
    def predicate(text: str) -> bool:
        words = text.split()
        if not words or words[0] != "!forexcalendar":
            return False
        return keyword is None or keyword in text
    return predicate


COMMANDS: List[Rule] = [
    Rule(_exact("!events", "!forexevents", "!forextoday"),
         Command(CAPTURE, days=1, group=GROUP_TODAY)),
    Rule(_calendar("week"), Command(CAPTURE, days=7)),
    Rule(_calendar("today"), Command(CAPTURE, days=1)),
    Rule(_calendar(), Command(CAPTURE, days=2)),
    Rule(_exact("!help", "!forexhelp"), Command(HELP)),
]


HELP_ENTRIES = [
    ("!events", "Fetch today's economic events (main command)"),
    ("!forextoday", "Fetch only today's economic events (screenshot)"),
    ("!forexcalendar", "Fetch today and tomorrow's economic events (screenshot)"),
    ("!forexcalendar week", "Fetch the full week's economic calendar (screenshot)"),
    ("!help or !forexhelp", "Show this help message"),
]


def match_command(content: str, rules: Optional[List[Rule]] = None) -> Optional[Command]:
    """Return the :class:`Command` for *content*, or ``None`` to ignore it."""
    text = (content or "").strip().lower()
    if not text:
        return None
    for rule in rules if rules is not None else COMMANDS:
        if rule.predicate(text):
            return rule.command
    return None
