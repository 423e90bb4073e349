"""Data models for the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from ffbot.config import Settings

# Day counts at or above this use the calendar's week view.
WEEK_VIEW_DAYS = 7


@dataclass
class CaptureRequest:
    """A single pipeline invocation; ``days`` is already clamped."""

    days: int

    @classmethod
    def create(cls, days: Optional[int], settings: Settings) -> CaptureRequest:
        """Build a request, falling back to the default and clamping to ``[1, max_days]``."""
        requested = days or settings.default_days
        return cls(days=max(1, min(requested, settings.max_days)))

    @property
    def is_week_view(self) -> bool:
        return self.days >= WEEK_VIEW_DAYS


@dataclass
class TodayMarkers:
    """Locale-formatted pieces of today's date as the calendar prints them."""

    weekday: str
    month: str
    day: int
    year: int

    @classmethod
    def from_datetime(cls, now: datetime) -> TodayMarkers:
        return cls(
            weekday=now.strftime("%a"),
            month=now.strftime("%b"),
            day=now.day,
            year=now.year,
        )

    @property
    def fragments(self) -> List[str]:
        """Header text fragments in match priority order."""
        return [
            f"{self.weekday} {self.month} {self.day}",
            f"{self.weekday} {self.day}",
            "today",
            self.weekday,
        ]

    @property
    def week_param(self) -> str:
        """Value of the ``week`` query parameter, e.g. ``oct19.2026``."""
        return f"{self.month.lower()}{self.day}.{self.year}"


@dataclass
class ClipRegion:
    """Screenshot clip rectangle in CSS pixels."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bounds(
        cls, table: dict[str, float], title: Optional[dict[str, float]] = None
    ) -> ClipRegion:
        """Union the title's box vertically with the table's box.

        The horizontal extent is the table's; the region starts at the
        title's top edge (or the table's, when there is no title).
        """
        top = title["y"] if title else table["y"]
        bottom = table["y"] + table["height"]
        return cls(x=table["x"], y=top, width=table["width"], height=bottom - top)

    def clamped(self, viewport_width: int, max_height: int) -> ClipRegion:
        """Return a copy that fits inside the viewport width and height cap.

        Coordinates are viewport-relative; any part above or left of the
        viewport is cut off rather than shifting the region.
        """
        x = max(0.0, self.x)
        y = max(0.0, self.y)
        width = self.width - (x - self.x)
        height = self.height - (y - self.y)
        return ClipRegion(
            x=x,
            y=y,
            width=max(0.0, min(width, viewport_width - x)),
            height=max(0.0, min(height, max_height)),
        )

    def as_clip(self) -> dict[str, float]:
        """Shape expected by ``page.screenshot(clip=...)``."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class RowPlan:
    """Row decisions for the in-page transform, as indices into the page's rows."""

    header_row: Optional[int]
    today_rows: List[int] = field(default_factory=list)
    hidden_rows: List[int] = field(default_factory=list)
    used_fallback: bool = False
    placeholder: bool = False


@dataclass
class TransformOutcome:
    """Row plan applied to the page, plus what the page reported back."""

    header_row: Optional[int] = None
    used_fallback: bool = False
    today_rows: int = 0
    placeholder_added: bool = False
    visible_rows: Optional[int] = None

    @classmethod
    def from_plan(cls, plan: RowPlan, data: Optional[dict[str, Any]]) -> TransformOutcome:
        data = data or {}
        visible = data.get("visibleRows")
        return cls(
            header_row=plan.header_row,
            used_fallback=plan.used_fallback,
            today_rows=len(plan.today_rows),
            placeholder_added=bool(data.get("placeholderAdded", False)),
            visible_rows=None if visible is None else int(visible),
        )
