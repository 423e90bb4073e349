"""Calendar screenshot pipeline.

``capture_calendar`` is the single public entry point.  Each call owns one
headless Chromium session for its whole lifetime:

    navigate → dismiss cookies → wait for table → inject CSS
    → mark today's rows → insert title → measure crop → screenshot

The browser is closed on every exit path.  Failures surface as
:class:`~ffbot.capture.errors.CaptureError`; nothing is retried.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ffbot.capture.errors import (
    AutomationError,
    CalendarNotFound,
    CaptureError,
    NavigationTimeout,
    ScreenshotFailed,
)
from ffbot.capture.models import CaptureRequest, ClipRegion, TodayMarkers, TransformOutcome
from ffbot.capture.page import (
    CALENDAR_CSS,
    MEASURE_SCRIPT,
    ROW_SNAPSHOT_SCRIPT,
    TITLE_CLASS,
    TRANSFORM_SCRIPT,
    class_of,
    locate_today_header,
    plan_rows,
    transform_args,
)
from ffbot.config import Settings
from ffbot.config import settings as default_settings

logger = logging.getLogger(__name__)

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def build_calendar_url(base_url: str, request: CaptureRequest, markers: TodayMarkers) -> str:
    """Return the calendar URL for *request*.

    Week views carry a ``week=<mon><day>.<year>`` selector; every URL pins
    the page to EST and today's date.
    """
    params: dict[str, str] = {}
    if request.is_week_view:
        params["week"] = markers.week_param
    params["tz"] = "EST"
    params["day"] = "today"
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{urlencode(params)}"


def screenshot_filename(moment: Optional[datetime] = None) -> str:
    """``forex-calendar-<ISO timestamp>.png`` with ``:`` and ``.`` made path-safe."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"forex-calendar-{stamp.replace(':', '-').replace('.', '-')}.png"


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------

def _load(page: Page, url: str, settings: Settings) -> None:
    logger.info("Navigating to calendar with EST timezone: %s", url)
    try:
        page.goto(url, wait_until="networkidle", timeout=settings.timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise NavigationTimeout(f"Timed out loading {url}") from exc


def _dismiss_cookies(page: Page, settings: Settings) -> None:
    """Click the cookie-consent button if there is one; never fatal."""
    button = settings.selectors.cookie_button
    try:
        if page.query_selector(button):
            page.click(button)
            page.wait_for_timeout(settings.wait_between_requests * 1000)
    except PlaywrightError as exc:
        logger.debug("No cookie dialog or error handling it: %s", exc)


def _wait_for_calendar(page: Page, settings: Settings) -> None:
    selector = settings.selectors.calendar_table
    try:
        page.wait_for_selector(selector, timeout=settings.timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise CalendarNotFound(f"Calendar table {selector!r} not found") from exc


def _highlight_today(
    page: Page, request: CaptureRequest, markers: TodayMarkers, settings: Settings
) -> TransformOutcome:
    """Plan today's rows from a row snapshot, then apply the plan in-page."""
    selectors = settings.selectors
    breaker_class = class_of(selectors.day_breaker)
    rows: list[dict[str, Any]] = page.eval_on_selector_all(selectors.row, ROW_SNAPSHOT_SCRIPT)

    header_row = locate_today_header(rows, markers.fragments, breaker_class)
    if header_row is None:
        logger.info("No header matched %s; using first-day rows", markers.fragments)
    else:
        logger.info("Found today header: %r", rows[header_row].get("text", ""))

    plan = plan_rows(rows, header_row, request.days, breaker_class, class_of(selectors.new_day))
    raw = page.evaluate(TRANSFORM_SCRIPT, transform_args(plan, request.days, selectors))
    outcome = TransformOutcome.from_plan(plan, raw)
    logger.info(
        "Marked %d today row(s) of %d (fallback=%s, placeholder=%s, visible=%s)",
        outcome.today_rows,
        len(rows),
        outcome.used_fallback,
        outcome.placeholder_added,
        outcome.visible_rows,
    )
    return outcome


def _measure_clip(page: Page, settings: Settings) -> Optional[ClipRegion]:
    """Title ∪ table box clamped to the viewport, or ``None`` if unmeasurable."""
    bounds: Optional[dict[str, Any]] = page.evaluate(
        MEASURE_SCRIPT,
        {"table": settings.selectors.calendar_table, "title": f".{TITLE_CLASS}"},
    )
    if not bounds:
        return None
    region = ClipRegion.from_bounds(bounds["table"], bounds.get("title")).clamped(
        settings.viewport_width, settings.max_capture_height
    )
    if region.width <= 0 or region.height <= 0:
        return None
    return region


def _screenshot(page: Page, path: Path, settings: Settings) -> Optional[ClipRegion]:
    """Capture the clipped calendar, falling back once to the viewport."""
    try:
        region = _measure_clip(page, settings)
        if region is not None:
            page.screenshot(path=str(path), clip=region.as_clip())
            logger.info(
                "Calendar screenshot saved with dimensions %dx%d",
                region.width,
                region.height,
            )
            return region
        logger.info("Calendar table could not be measured; capturing the viewport")
    except (PlaywrightError, KeyError, TypeError) as exc:
        logger.error("Error taking calendar table screenshot: %s", exc)

    try:
        page.screenshot(path=str(path), full_page=False)
    except PlaywrightError as exc:
        raise ScreenshotFailed(f"Viewport screenshot failed: {exc}") from exc
    logger.info("Fallback: visible area screenshot saved as %s", path)
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def capture_calendar(
    days: Optional[int] = None,
    settings: Optional[Settings] = None,
    *,
    now: Optional[datetime] = None,
    playwright_factory: Optional[Callable[[], Any]] = None,
) -> Path:
    """Screenshot the economic calendar and return the PNG's path.

    Args:
        days: Number of days to show.  ``None``/``0`` means
            ``settings.default_days``; anything above ``settings.max_days``
            is clamped.  ``1`` hides every row except today's.
        settings: Configuration; defaults to the module-level settings.
        now: Reference time for "today" (defaults to the current time in
            ``settings.calendar_timezone``).
        playwright_factory: Replacement for ``sync_playwright``.

    Returns:
        Path of the written PNG inside ``settings.screenshot_dir``.

    Raises:
        CaptureError: Navigation timed out, the calendar never appeared,
            both screenshot attempts failed, or the browser raised anything
            else.
    """
    settings = settings or default_settings
    request = CaptureRequest.create(days, settings)
    factory = playwright_factory or sync_playwright

    try:
        now = now or datetime.now(ZoneInfo(settings.calendar_timezone))
        markers = TodayMarkers.from_datetime(now)
        url = build_calendar_url(settings.calendar_url, request, markers)

        settings.ensure_screenshot_dir()
        path = settings.screenshot_dir / screenshot_filename()
        logger.info("Taking screenshot of the calendar for %d day(s)", request.days)

        with factory() as pw:
            browser = pw.chromium.launch(headless=True, args=_LAUNCH_ARGS)
            try:
                page = browser.new_page(
                    user_agent=settings.user_agent,
                    viewport={
                        "width": settings.viewport_width,
                        "height": settings.viewport_height,
                    },
                )
                _load(page, url, settings)
                _dismiss_cookies(page, settings)
                _wait_for_calendar(page, settings)

                page.add_style_tag(content=CALENDAR_CSS)
                page.wait_for_timeout(settings.render_settle * 1000)

                _highlight_today(page, request, markers, settings)
                page.wait_for_timeout(settings.animation_settle * 1000)

                _screenshot(page, path, settings)
            finally:
                browser.close()
    except CaptureError:
        logger.exception("Error capturing calendar screenshot")
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error capturing calendar screenshot")
        raise AutomationError(str(exc)) from exc

    return path
