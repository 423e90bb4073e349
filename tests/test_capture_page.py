"""Tests for the in-page helpers: header matching, row planning and script assets."""

from __future__ import annotations

from ffbot.capture.page import (
    CALENDAR_CSS,
    MEASURE_SCRIPT,
    NO_EVENTS_TEXT,
    PLACEHOLDER_CLASS,
    TITLE_CLASS,
    TRANSFORM_SCRIPT,
    class_of,
    find_today_header,
    locate_today_header,
    plan_rows,
    title_for,
    transform_args,
)
from ffbot.config import Selectors

_FRAGMENTS = ["Mon Oct 19", "Mon 19", "today", "Mon"]


class TestFindTodayHeader:
    def test_matches_full_date(self) -> None:
        headers = ["SunOct 18", "MonOct 19", "TueOct 20"]
        assert find_today_header(headers, _FRAGMENTS) == 1

    def test_matches_spaced_date(self) -> None:
        headers = ["Sun Oct 18", "Mon Oct 19"]
        assert find_today_header(headers, _FRAGMENTS) == 1

    def test_matches_today_case_insensitive(self) -> None:
        headers = ["Yesterday's stuff", "TODAY"]
        # "Yesterday" does not contain "today"
        assert find_today_header(headers, _FRAGMENTS) == 1

    def test_first_match_in_document_order_wins(self) -> None:
        headers = ["Tue Oct 20", "Mon Oct 26", "Mon Oct 19"]
        # The weekday fragment matches the second header before the exact date.
        assert find_today_header(headers, _FRAGMENTS) == 1

    def test_day_must_not_continue_with_digit(self) -> None:
        fragments = ["Thu Oct 1", "Thu 1", "today"]
        headers = ["Thu Oct 15", "Thu Oct 1"]
        assert find_today_header(headers, fragments) == 1

    def test_no_match_returns_none(self) -> None:
        headers = ["Tue Oct 20", "Wed Oct 21"]
        assert find_today_header(headers, _FRAGMENTS) is None

    def test_empty_headers(self) -> None:
        assert find_today_header([], _FRAGMENTS) is None

    def test_whitespace_in_page_text_is_ignored(self) -> None:
        headers = ["\n   Mon\n   Oct 19  \n"]
        assert find_today_header(headers, ["Mon Oct 19"]) == 0


class TestTitleFor:
    def test_variants(self) -> None:
        assert title_for(1) == "TODAY'S ECONOMIC EVENTS (EST)"
        assert "WEEK" in title_for(7)
        assert "TODAY" not in title_for(2)

_BREAKER = "calendar__row--day-breaker"
_NEW_DAY = "calendar__row--new-day"


def _row(text: str = "", *classes: str) -> dict:
    return {"classes": ["calendar__row", *classes], "text": text}


def _week_rows() -> list:
    """Sun header + 2 events, Mon header + 3 events, Tue header + 1 event."""
    return [
        _row("SunOct 18", _BREAKER),
        _row("AUD CPI", _NEW_DAY),
        _row("JPY GDP", _NEW_DAY),
        _row("MonOct 19", _BREAKER),
        _row("USD NFP"),
        _row("EUR PMI"),
        _row("GBP CPI"),
        _row("TueOct 20", _BREAKER),
        _row("CAD Retail"),
    ]


class TestClassOf:
    def test_strips_leading_dot(self) -> None:
        assert class_of(".calendar__row--new-day") == _NEW_DAY
        assert class_of(_NEW_DAY) == _NEW_DAY


class TestLocateTodayHeader:
    def test_returns_row_index_not_header_index(self) -> None:
        assert locate_today_header(_week_rows(), _FRAGMENTS, _BREAKER) == 3

    def test_event_rows_are_not_matched(self) -> None:
        rows = [_row("Mon 19 speech"), _row("TueOct 20", _BREAKER)]
        assert locate_today_header(rows, _FRAGMENTS, _BREAKER) is None

    def test_no_rows(self) -> None:
        assert locate_today_header([], _FRAGMENTS, _BREAKER) is None


class TestPlanRows:
    def test_today_stops_at_next_day_header(self) -> None:
        plan = plan_rows(_week_rows(), 3, 7, _BREAKER, _NEW_DAY)
        assert plan.header_row == 3
        assert plan.today_rows == [4, 5, 6]
        assert plan.used_fallback is False

    def test_multi_day_hides_nothing(self) -> None:
        plan = plan_rows(_week_rows(), 3, 7, _BREAKER, _NEW_DAY)
        assert plan.hidden_rows == []
        assert plan.placeholder is False

    def test_single_day_hides_other_days_and_their_headers(self) -> None:
        plan = plan_rows(_week_rows(), 3, 1, _BREAKER, _NEW_DAY)
        assert plan.hidden_rows == [0, 1, 2, 7, 8]
        assert 3 not in plan.hidden_rows
        assert plan.placeholder is False

    def test_last_day_runs_to_end_of_table(self) -> None:
        plan = plan_rows(_week_rows(), 7, 7, _BREAKER, _NEW_DAY)
        assert plan.today_rows == [8]

    def test_no_header_falls_back_to_first_day_rows(self) -> None:
        plan = plan_rows(_week_rows(), None, 7, _BREAKER, _NEW_DAY)
        assert plan.used_fallback is True
        assert plan.today_rows == [1, 2]

    def test_single_day_fallback_keeps_only_first_day_rows(self) -> None:
        plan = plan_rows(_week_rows(), None, 1, _BREAKER, _NEW_DAY)
        assert plan.hidden_rows == [0, 3, 4, 5, 6, 7, 8]

    def test_empty_today_on_single_day_requests_one_placeholder(self) -> None:
        rows = [_row("MonOct 19", _BREAKER), _row("TueOct 20", _BREAKER), _row("CAD Retail")]
        plan = plan_rows(rows, 0, 1, _BREAKER, _NEW_DAY)
        assert plan.today_rows == []
        assert plan.placeholder is True
        assert plan.hidden_rows == [1, 2]

    def test_empty_today_on_multi_day_has_no_placeholder(self) -> None:
        rows = [_row("MonOct 19", _BREAKER), _row("TueOct 20", _BREAKER)]
        assert plan_rows(rows, 0, 3, _BREAKER, _NEW_DAY).placeholder is False


class TestTitleFor:
    def test_variants(self) -> None:
        assert title_for(1) == "TODAY'S ECONOMIC EVENTS (EST)"
        assert "WEEK" in title_for(7)
        assert "TODAY" not in title_for(2)


class TestTransformArgs:
    def test_carries_plan_selectors_and_title(self) -> None:
        plan = plan_rows(_week_rows(), 3, 1, _BREAKER, _NEW_DAY)
        args = transform_args(plan, 1, Selectors())
        assert args["headerRow"] == 3
        assert args["todayRows"] == [4, 5, 6]
        assert args["hiddenRows"] == [0, 1, 2, 7, 8]
        assert args["isolate"] is True
        assert args["noEventsText"] == NO_EVENTS_TEXT
        assert args["classes"]["title"] == TITLE_CLASS
        assert args["classes"]["placeholder"] == PLACEHOLDER_CLASS
        assert args["selectors"]["table"] == ".calendar__table"

    def test_missing_header_passes_through(self) -> None:
        plan = plan_rows(_week_rows(), None, 2, _BREAKER, _NEW_DAY)
        args = transform_args(plan, 2, Selectors())
        assert args["headerRow"] is None
        assert args["isolate"] is False


class TestPageAssets:
    def test_rows_are_toggled_with_important_inline_style(self) -> None:
        # Stylesheet rules marked !important beat plain inline styles.
        assert "setProperty('display', value, 'important')" in TRANSFORM_SCRIPT
        assert "style.display" not in TRANSFORM_SCRIPT

    def test_stylesheet_leaves_row_display_to_the_transform(self) -> None:
        start = CALENDAR_CSS.index(".calendar__row--day-breaker,")
        block = CALENDAR_CSS[start:CALENDAR_CSS.index("}", start)]
        assert "display" not in block

    def test_measure_returns_viewport_coordinates(self) -> None:
        assert "getBoundingClientRect" in MEASURE_SCRIPT
        assert "scrollY" not in MEASURE_SCRIPT
        assert "scrollIntoView" in MEASURE_SCRIPT
