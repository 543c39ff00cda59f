# -*- coding: utf-8 -*-
"""Tests for the countdown clock."""

from __future__ import annotations

import pytest

pytest.importorskip("PyQt6")

from wordsprint.core.clock import SessionClock, format_clock


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (60, "01:00"), (125, "02:05"), (1800, "30:00"), (-3, "00:00")],
)
def test_format_clock(seconds: int, expected: str) -> None:
    assert format_clock(seconds) == expected


def test_start_sets_remaining_and_active(qt_app) -> None:
    clock = SessionClock()
    clock.start(120)
    assert clock.is_active()
    assert clock.remaining_seconds == 120
    clock.pause()


def test_start_rejects_non_positive_duration(qt_app) -> None:
    clock = SessionClock()
    with pytest.raises(ValueError):
        clock.start(0)
    assert not clock.is_active()


def test_start_while_active_is_ignored(qt_app) -> None:
    clock = SessionClock()
    clock.start(60)
    clock.tick()
    clock.start(300)
    assert clock.remaining_seconds == 59
    clock.pause()


def test_tick_decrements_and_emits(qt_app) -> None:
    clock = SessionClock()
    ticks: list[int] = []
    clock.ticked.connect(ticks.append)
    clock.start(3)
    clock.tick()
    clock.tick()
    assert ticks == [2, 1]
    assert clock.remaining_seconds == 1
    clock.pause()


def test_tick_while_paused_changes_nothing(qt_app) -> None:
    clock = SessionClock()
    clock.start(10)
    clock.pause()
    clock.tick()
    assert clock.remaining_seconds == 10
    assert not clock.is_active()


def test_pause_is_idempotent(qt_app) -> None:
    clock = SessionClock()
    changes: list[bool] = []
    clock.active_changed.connect(changes.append)
    clock.start(10)
    clock.pause()
    clock.pause()
    assert changes == [True, False]


def test_expiry_fires_exactly_once(qt_app) -> None:
    clock = SessionClock()
    expiries: list[bool] = []
    clock.expired.connect(lambda: expiries.append(True))
    clock.start(2)
    for _ in range(5):
        clock.tick()
    assert expiries == [True]
    assert clock.remaining_seconds == 0
    assert not clock.is_active()


def test_resume_with_remaining_counts_down_from_there(qt_app) -> None:
    clock = SessionClock()
    clock.start(5)
    clock.tick()
    clock.pause()
    clock.start(clock.remaining_seconds)
    clock.tick()
    assert clock.remaining_seconds == 3
    clock.pause()


def test_restart_after_expiry_can_expire_again(qt_app) -> None:
    clock = SessionClock()
    expiries: list[bool] = []
    clock.expired.connect(lambda: expiries.append(True))
    clock.start(1)
    clock.tick()
    clock.start(1)
    clock.tick()
    assert expiries == [True, True]
