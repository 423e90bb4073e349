"""Centralised settings for the ForexFactory calendar bot.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

A :class:`Settings` instance is handed explicitly to the capture pipeline and
the dispatcher; the module-level ``settings`` default is only used by the CLI
wiring.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Icon classes the calendar uses for each impact level.
IMPACT_CLASSES = {
    "high": "icon--ff-impact-red",
    "medium": "icon--ff-impact-ora",
    "low": "icon--ff-impact-yel",
}


@dataclass
class Selectors:
    """CSS selectors for the calendar page's markup."""

    calendar_table: str = ".calendar__table"
    table_body: str = ".calendar__table tbody"
    row: str = ".calendar__row"
    day_breaker: str = ".calendar__row--day-breaker"
    new_day: str = ".calendar__row--new-day"
    cookie_button: str = 'button[data-cookiefirst-action="accept"]'


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Chat transport
    # ------------------------------------------------------------------
    discord_token: str = field(
        default_factory=lambda: os.environ.get("DISCORD_TOKEN", "")
    )

    # ------------------------------------------------------------------
    # Target page
    # ------------------------------------------------------------------
    calendar_url: str = field(
        default_factory=lambda: os.environ.get(
            "FF_CALENDAR_URL", "https://www.forexfactory.com/calendar"
        )
    )
    calendar_timezone: str = field(
        default_factory=lambda: os.environ.get("FF_TIMEZONE", "America/New_York")
    )
    selectors: Selectors = field(default_factory=Selectors)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    screenshot_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("FF_SCREENSHOT_DIR", Path.cwd() / "screenshots")
        )
    )

    # ------------------------------------------------------------------
    # Day window
    # ------------------------------------------------------------------
    default_days: int = field(
        default_factory=lambda: int(os.environ.get("FF_DEFAULT_DAYS", "7"))
    )
    max_days: int = field(
        default_factory=lambda: int(os.environ.get("FF_MAX_DAYS", "14"))
    )

    # ------------------------------------------------------------------
    # Browser session
    # ------------------------------------------------------------------
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("FF_TIMEOUT", "30.0"))
    )
    wait_between_requests: float = field(
        default_factory=lambda: float(os.environ.get("FF_WAIT_BETWEEN_REQUESTS", "2.0"))
    )
    render_settle: float = field(
        default_factory=lambda: float(os.environ.get("FF_RENDER_SETTLE", "3.0"))
    )
    animation_settle: float = field(
        default_factory=lambda: float(os.environ.get("FF_ANIMATION_SETTLE", "1.0"))
    )
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("FF_VIEWPORT_WIDTH", "1000"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("FF_VIEWPORT_HEIGHT", "1600"))
    )
    max_capture_height: int = field(
        default_factory=lambda: int(os.environ.get("FF_MAX_CAPTURE_HEIGHT", "1600"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("FF_USER_AGENT", _DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    @property
    def timeout_ms(self) -> int:
        """Playwright timeouts are expressed in milliseconds."""
        return int(self.timeout * 1000)

    def ensure_screenshot_dir(self) -> None:
        """Create the screenshot directory if it does not exist."""
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)


# Module-level default used by the CLI:
#   from ffbot.config import settings
settings = Settings()
