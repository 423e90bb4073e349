"""Capture package — calendar page to cropped PNG."""

from ffbot.capture.errors import (
    AutomationError,
    CalendarNotFound,
    CaptureError,
    NavigationTimeout,
    ScreenshotFailed,
)
from ffbot.capture.models import CaptureRequest, ClipRegion
from ffbot.capture.pipeline import build_calendar_url, capture_calendar

__all__ = [
    "capture_calendar",
    "build_calendar_url",
    "CaptureRequest",
    "ClipRegion",
    "CaptureError",
    "NavigationTimeout",
    "CalendarNotFound",
    "ScreenshotFailed",
    "AutomationError",
]
