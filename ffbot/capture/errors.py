"""Failure signals raised by the capture pipeline.

Callers only need to catch :class:`CaptureError`; the subclasses exist so
logs say which stage gave up.
"""

from __future__ import annotations


class CaptureError(Exception):
    """Base class for every pipeline failure."""


class NavigationTimeout(CaptureError):
    """The calendar page did not settle within the configured timeout."""


class CalendarNotFound(CaptureError):
    """The calendar table never appeared in the DOM."""


class ScreenshotFailed(CaptureError):
    """Both the clipped capture and the viewport fallback failed."""


class AutomationError(CaptureError):
    """Any other browser-automation failure."""
