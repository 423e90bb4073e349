"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from ffbot.config import IMPACT_CLASSES, Selectors, Settings


def test_defaults() -> None:
    cfg = Settings()
    assert cfg.calendar_url.endswith("/calendar")
    assert cfg.viewport_width == 1000
    assert cfg.selectors.calendar_table == ".calendar__table"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FF_MAX_DAYS", "5")
    monkeypatch.setenv("FF_TIMEOUT", "12.5")
    monkeypatch.setenv("FF_SCREENSHOT_DIR", str(tmp_path / "out"))

    cfg = Settings()

    assert cfg.max_days == 5
    assert cfg.timeout_ms == 12500
    assert cfg.screenshot_dir == tmp_path / "out"


def test_ensure_screenshot_dir(tmp_path: Path) -> None:
    cfg = Settings(screenshot_dir=tmp_path / "a" / "b")
    cfg.ensure_screenshot_dir()
    assert cfg.screenshot_dir.is_dir()


def test_instances_do_not_share_selectors() -> None:
    first, second = Settings(), Settings()
    first.selectors.calendar_table = "#custom"
    assert second.selectors.calendar_table == Selectors().calendar_table


def test_impact_classes() -> None:
    assert set(IMPACT_CLASSES) == {"high", "medium", "low"}
