"""Tests for the CTL/ATL/TSB/ACWR recurrence."""

from __future__ import annotations

import math
from datetime import date

import pytest

from load_engine.exceptions import InvalidInputError
from load_engine.math.smoothing import (
    LoadState,
    advance_day,
    calculate_acwr,
    calculate_atl,
    calculate_ctl,
    calculate_exponential_smoothing,
    calculate_tsb,
    iter_calendar_days,
    run_recurrence,
)


class TestExponentialSmoothing:
    def test_single_step_from_zero(self) -> None:
        assert calculate_ctl(100, 0) == pytest.approx(100 * (1 - math.exp(-1 / 42)))
        assert calculate_atl(100, 0) == pytest.approx(100 * (1 - math.exp(-1 / 7)))

    def test_decay_without_load(self) -> None:
        assert calculate_ctl(0, 50) == pytest.approx(50 * math.exp(-1 / 42))

    def test_atl_reacts_faster_than_ctl(self) -> None:
        assert calculate_atl(100, 0) > calculate_ctl(100, 0)

    @pytest.mark.parametrize("time_constant", [0, -7])
    def test_non_positive_time_constant_raises(self, time_constant: float) -> None:
        with pytest.raises(InvalidInputError):
            calculate_exponential_smoothing(10, 0, time_constant)


class TestACWRAndTSB:
    def test_tsb_is_ctl_minus_atl(self) -> None:
        assert calculate_tsb(50, 70) == -20

    def test_acwr_ratio(self) -> None:
        assert calculate_acwr(atl=60, ctl=50) == pytest.approx(1.2)

    def test_acwr_zero_ctl(self) -> None:
        assert calculate_acwr(atl=10, ctl=0) == 0.0


class TestAdvanceDay:
    def test_tsb_uses_previous_state(self) -> None:
        step = advance_day(LoadState(ctl=50, atl=70), 100)
        assert step.tsb == -20

    def test_acwr_uses_updated_state(self) -> None:
        step = advance_day(LoadState(ctl=50, atl=70), 100)
        assert step.acwr == pytest.approx(step.atl / step.ctl)

    def test_first_day_from_zero(self) -> None:
        step = advance_day(LoadState(), 100)
        assert step.tsb == 0
        assert step.ctl == pytest.approx(2.3528, abs=1e-3)
        assert step.atl == pytest.approx(13.312, abs=1e-3)

    def test_state_carries_ctl_atl(self) -> None:
        step = advance_day(LoadState(), 100)
        assert step.state == LoadState(ctl=step.ctl, atl=step.atl)


class TestRunRecurrence:
    def test_constant_load_converges(self) -> None:
        steps = run_recurrence([50.0] * 400)
        assert steps[-1].ctl == pytest.approx(50.0, abs=0.01)
        assert steps[-1].atl == pytest.approx(50.0, abs=1e-6)
        assert steps[-1].acwr == pytest.approx(1.0, abs=1e-3)

    def test_ctl_monotonic_under_constant_load(self) -> None:
        ctls = [s.ctl for s in run_recurrence([50.0] * 60)]
        assert all(b > a for a, b in zip(ctls, ctls[1:]))

    def test_seeded(self) -> None:
        steps = run_recurrence([0.0], seed=LoadState(ctl=42, atl=30))
        assert steps[0].tsb == 12
        assert steps[0].ctl == pytest.approx(42 * math.exp(-1 / 42))

    def test_chained_tsb(self) -> None:
        first, second = run_recurrence([100.0, 0.0])
        assert second.tsb == pytest.approx(first.ctl - first.atl)

    def test_matches_daily_steps(self) -> None:
        loads = [80.0, 0.0, 120.0, 35.5, 0.0, 60.0]
        state = LoadState(ctl=20, atl=25)
        for load, step in zip(loads, run_recurrence(loads, seed=state)):
            expected = advance_day(state, load)
            assert step.ctl == pytest.approx(expected.ctl)
            assert step.atl == pytest.approx(expected.atl)
            assert step.tsb == pytest.approx(expected.tsb)
            assert step.acwr == pytest.approx(expected.acwr)
            state = expected.state

    def test_empty(self) -> None:
        assert run_recurrence([]) == []


class TestCalendarDays:
    def test_inclusive(self) -> None:
        days = list(iter_calendar_days(date(2026, 2, 27), date(2026, 3, 2)))
        assert days == [
            date(2026, 2, 27),
            date(2026, 2, 28),
            date(2026, 3, 1),
            date(2026, 3, 2),
        ]

    def test_across_dst_change(self) -> None:
        days = list(iter_calendar_days(date(2026, 3, 28), date(2026, 3, 30)))
        assert len(days) == 3
        assert len(set(days)) == 3

    def test_empty_when_start_after_end(self) -> None:
        assert list(iter_calendar_days(date(2026, 3, 2), date(2026, 3, 1))) == []
