"""Tests for the per-turn countdown."""
from __future__ import annotations

import pytest

from wallclimb.game.timer import TimerController


def test_starts_full():
    timer = TimerController(3000)
    assert timer.time_left == 3000
    assert timer.fraction == 1.0


def test_tick_reports_expiry():
    timer = TimerController(3000)
    assert timer.tick(1000) is False
    assert timer.time_left == 2000
    assert timer.tick(2000) is True
    assert timer.expired


def test_display_clamped_at_zero():
    """Overshoot is stored but never displayed."""
    timer = TimerController(3000)
    timer.tick(3500)
    assert timer.time_left == -500
    assert timer.display == 0.0
    assert timer.fraction == 0.0


def test_reset_restores_budget():
    timer = TimerController(1500)
    timer.tick(900)
    timer.reset()
    assert timer.time_left == 1500


def test_fraction_midway():
    timer = TimerController(2000)
    timer.tick(500)
    assert timer.fraction == pytest.approx(0.75)


def test_non_positive_budget_rejected():
    with pytest.raises(ValueError):
        TimerController(0)
