"""In-page assets for the calendar capture: stylesheet, scripts, header matching.

Deciding which rows belong to today happens in Python over a snapshot of the
rows (class list and text, in document order).  The scripts evaluated with
``page.evaluate(script, args)`` only apply those decisions to the DOM and
measure the result.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Sequence

from ffbot.capture.models import RowPlan
from ffbot.config import IMPACT_CLASSES

TITLE_CLASS = "today-events-title"
TODAY_HEADER_CLASS = "calendar__row--custom-today-header"
TODAY_ROW_CLASS = "calendar__row--custom-today"
PLACEHOLDER_CLASS = "calendar__row--no-events"
NO_EVENTS_TEXT = "No economic events scheduled for today"


def class_of(selector: str) -> str:
    """``.calendar__row--new-day`` → ``calendar__row--new-day``"""
    return selector.lstrip(".")


def find_today_header(header_texts: Sequence[str], fragments: Iterable[str]) -> Optional[int]:
    """Return the index of the first day header that mentions today.

    Headers are checked in document order; a header matches when its text
    contains any of *fragments*.  ``"today"`` is compared case-insensitively,
    the date fragments with whitespace ignored (the page renders
    ``MonOct 19``) and never followed by another digit.
    """
    patterns = []
    for fragment in fragments:
        if not fragment:
            continue
        if fragment.lower() == "today":
            patterns.append(re.compile("today", re.IGNORECASE))
        else:
            compact = re.escape("".join(fragment.split()))
            patterns.append(re.compile(compact + r"(?!\d)"))

    for index, raw in enumerate(header_texts):
        text = "".join((raw or "").split())
        if any(p.search(text) for p in patterns):
            return index
    return None


def locate_today_header(
    rows: Sequence[dict[str, Any]], fragments: Iterable[str], breaker_class: str
) -> Optional[int]:
    """Row index of today's day header within *rows*, or ``None``."""
    breakers = [i for i, row in enumerate(rows) if breaker_class in row.get("classes", ())]
    match = find_today_header([rows[i].get("text", "") for i in breakers], fragments)
    return None if match is None else breakers[match]


def plan_rows(
    rows: Sequence[dict[str, Any]],
    header_row: Optional[int],
    days: int,
    breaker_class: str,
    new_day_class: str,
) -> RowPlan:
    """Decide which rows are today's, which to hide and whether to add a placeholder.

    With a header, today's rows are those strictly between it and the next
    day header.  Without one, rows carrying *new_day_class* (the first day
    group) stand in.  A one-day window hides everything else and, when
    today has no rows, asks for a single "no events" row.
    """
    today: list[int] = []
    if header_row is not None:
        for index in range(header_row + 1, len(rows)):
            if breaker_class in rows[index].get("classes", ()):
                break
            today.append(index)
    else:
        today = [i for i, row in enumerate(rows) if new_day_class in row.get("classes", ())]

    hidden: list[int] = []
    if days == 1:
        keep = set(today)
        if header_row is not None:
            keep.add(header_row)
        hidden = [i for i in range(len(rows)) if i not in keep]

    return RowPlan(
        header_row=header_row,
        today_rows=today,
        hidden_rows=hidden,
        used_fallback=header_row is None,
        placeholder=days == 1 and not today,
    )


def title_for(days: int) -> str:
    """Banner text inserted above the calendar table."""
    if days == 1:
        return "TODAY'S ECONOMIC EVENTS (EST)"
    if days >= 7:
        return "THIS WEEK'S ECONOMIC EVENTS (EST)"
    return "UPCOMING ECONOMIC EVENTS (EST)"


CALENDAR_CSS = f"""
/* Hide page chrome */
.calendar__filter, .calendar-toolbar, .calendar-options, .calendar__legend,
.calendar-search-module, .box-header, .calendar__header, footer, header,
.calendar__row--empty, .calendar__row--nophone {{
  display: none !important;
}}

.calendar__table {{
  margin: 0 !important;
  width: 100% !important;
  box-shadow: none !important;
  border: 1px solid #ccc !important;
  border-collapse: collapse !important;
}}

.calendar__row {{
  border-bottom: 1px solid #eee !important;
  height: 40px !important;
}}

.calendar__row--day-breaker, .{TODAY_HEADER_CLASS} {{
  background-color: #f8f8f8 !important;
  text-align: center !important;
  font-weight: bold !important;
  padding: 10px 0 !important;
  font-size: 16px !important;
}}

.calendar__row--today, .{TODAY_ROW_CLASS}, .calendar__row--new-day {{
  background-color: rgba(240, 248, 255, 0.3) !important;
  border-left: 4px solid #4682b4 !important;
}}

.calendar__cell {{
  padding: 8px !important;
  vertical-align: middle !important;
}}

.calendar__currency {{
  font-weight: bold !important;
}}

.calendar__event, .calendar__event-title {{
  font-size: 14px !important;
}}

.{IMPACT_CLASSES["high"]}, [class*="impact-red"] {{
  background-color: #FF0000 !important;
  width: 8px !important;
  padding: 0 !important;
}}

.{IMPACT_CLASSES["medium"]}, [class*="impact-ora"] {{
  background-color: #FFA500 !important;
  width: 8px !important;
  padding: 0 !important;
}}

.{IMPACT_CLASSES["low"]}, [class*="impact-yel"] {{
  background-color: #FFFF00 !important;
  width: 8px !important;
  padding: 0 !important;
}}

.calendar__actual, .calendar__forecast, .calendar__previous {{
  text-align: center !important;
  font-family: monospace !important;
}}

.calendar__actual.calendar__actual--better, .better {{
  color: green !important;
  font-weight: bold !important;
}}

.calendar__actual.calendar__actual--worse, .worse {{
  color: red !important;
  font-weight: bold !important;
}}

/* Time, currency, event, impact, actual, forecast, previous */
.calendar__cell:nth-child(n+8) {{
  display: none !important;
}}

.{TITLE_CLASS} {{
  font-size: 20px !important;
  font-weight: bold !important;
  text-align: center !important;
  margin: 10px 0 !important;
  padding: 10px !important;
  background-color: #4682b4 !important;
  color: white !important;
  border-radius: 5px !important;
}}
"""


# args: {headerRow, todayRows, hiddenRows, isolate, placeholder, title,
#        noEventsText, classes, selectors}
TRANSFORM_SCRIPT = """
(args) => {
  const sel = args.selectors;
  const cls = args.classes;
  const rows = Array.from(document.querySelectorAll(sel.row));
  const show = (row, value) => row.style.setProperty('display', value, 'important');

  const header = args.headerRow === null ? null : (rows[args.headerRow] || null);
  if (header) {
    header.classList.add(cls.todayHeader);
    if (args.isolate) show(header, 'table-row');
  }
  for (const index of args.todayRows) {
    const row = rows[index];
    if (!row) continue;
    row.classList.add(cls.todayRow);
    if (args.isolate) show(row, 'table-row');
  }
  for (const index of args.hiddenRows) {
    if (rows[index]) show(rows[index], 'none');
  }

  let placeholderAdded = false;
  const body = document.querySelector(sel.tableBody);
  if (args.placeholder && body && !body.querySelector('.' + cls.placeholder)) {
    const row = document.createElement('tr');
    row.className = 'calendar__row ' + cls.placeholder;
    const cell = document.createElement('td');
    cell.colSpan = 7;
    cell.style.textAlign = 'center';
    cell.style.padding = '20px';
    cell.style.fontWeight = 'bold';
    cell.textContent = args.noEventsText;
    row.appendChild(cell);
    body.appendChild(row);
    show(row, 'table-row');
    placeholderAdded = true;
  }

  const table = document.querySelector(sel.table);
  if (table && table.parentNode && !document.querySelector('.' + cls.title)) {
    const banner = document.createElement('div');
    banner.className = cls.title;
    banner.textContent = args.title;
    table.parentNode.insertBefore(banner, table);
  }

  const visible = Array.from(document.querySelectorAll(sel.row))
    .filter((row) => window.getComputedStyle(row).display !== 'none');
  return { placeholderAdded: placeholderAdded, visibleRows: visible.length };
}
"""


# Scrolls the crop's top edge to the top of the viewport, then returns
# viewport-relative boxes, which is what ``page.screenshot(clip=...)`` expects.
MEASURE_SCRIPT = """
(args) => {
  const box = (el) => {
    const r = el.getBoundingClientRect();
    return { x: r.x, y: r.y, width: r.width, height: r.height };
  };
  const table = document.querySelector(args.table);
  if (!table) return null;
  const title = document.querySelector(args.title);
  (title || table).scrollIntoView({ block: 'start', behavior: 'instant' });
  return { table: box(table), title: title ? box(title) : null };
}
"""


ROW_SNAPSHOT_SCRIPT = """
(rows) => rows.map((row) => ({
  classes: Array.from(row.classList),
  text: row.textContent.trim(),
}))
"""


def transform_args(plan: RowPlan, days: int, selectors) -> dict:
    """Build the argument object for :data:`TRANSFORM_SCRIPT`."""
    return {
        "headerRow": plan.header_row,
        "todayRows": plan.today_rows,
        "hiddenRows": plan.hidden_rows,
        "isolate": days == 1,
        "placeholder": plan.placeholder,
        "title": title_for(days),
        "noEventsText": NO_EVENTS_TEXT,
        "classes": {
            "todayHeader": TODAY_HEADER_CLASS,
            "todayRow": TODAY_ROW_CLASS,
            "title": TITLE_CLASS,
            "placeholder": PLACEHOLDER_CLASS,
        },
        "selectors": {
            "table": selectors.calendar_table,
            "tableBody": selectors.table_body,
            "row": selectors.row,
        },
    }
