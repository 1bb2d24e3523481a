"""Tests for weekly monotony, strain and Monday-anchored grouping."""

from __future__ import annotations

from datetime import date

import pytest

from load_engine.math.weekly import (
    build_weekly_profiles,
    calculate_monotony,
    calculate_strain,
    group_daily_loads_by_week,
    week_start,
)
from load_engine.models.load_profile import DailyLoadProfile


def _daily(day: date, trimp: float) -> DailyLoadProfile:
    return DailyLoadProfile(
        athlete_id="athlete-1",
        date=day,
        daily_trimp=trimp,
        ctl=0.0,
        atl=0.0,
        tsb=0.0,
        acwr=0.0,
        formula_version="ewma@1.0.0",
    )


class TestMonotony:
    def test_identical_nonzero_loads_capped(self) -> None:
        assert calculate_monotony([10.0] * 7) == 2.0

    def test_identical_non_representable_loads_capped(self) -> None:
        assert calculate_monotony([0.1] * 7) == 2.0

    def test_rest_week(self) -> None:
        assert calculate_monotony([0.0] * 7) == 0.0

    def test_empty(self) -> None:
        assert calculate_monotony([]) == 0.0

    def test_mean_over_population_std(self) -> None:
        # mean 20, population std 10
        assert calculate_monotony([10.0, 30.0]) == pytest.approx(2.0)

    def test_order_independent(self) -> None:
        loads = [10.0, 80.0, 0.0, 45.0, 0.0, 120.0, 30.0]
        assert calculate_monotony(loads) == pytest.approx(
            calculate_monotony(list(reversed(loads)))
        )

    def test_hard_easy_week_below_cap(self) -> None:
        assert calculate_monotony([100, 0, 80, 0, 60, 0, 120]) < 2.0


class TestStrain:
    def test_product(self) -> None:
        assert calculate_strain(100, 1.5) == 150


class TestWeekGrouping:
    def test_week_start_is_monday(self) -> None:
        assert week_start(date(2026, 3, 4)) == date(2026, 3, 2)
        assert week_start(date(2026, 3, 2)) == date(2026, 3, 2)
        assert week_start(date(2026, 3, 8)) == date(2026, 3, 2)

    def test_sunday_and_monday_split(self) -> None:
        weeks = group_daily_loads_by_week(
            [_daily(date(2026, 3, 8), 40.0), _daily(date(2026, 3, 9), 60.0)]
        )
        assert list(weeks) == [date(2026, 3, 2), date(2026, 3, 9)]
        assert weeks[date(2026, 3, 2)] == [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 40.0]
        assert weeks[date(2026, 3, 9)] == [60.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]

    def test_no_profiles(self) -> None:
        assert group_daily_loads_by_week([]) == {}


class TestBuildWeeklyProfiles:
    def test_one_row_per_week(self) -> None:
        profiles = [_daily(date(2026, 3, 2 + i), 50.0) for i in range(7)]
        (weekly,) = build_weekly_profiles("athlete-1", profiles)
        assert weekly.week_start_date == date(2026, 3, 2)
        assert weekly.total_trimp == 350.0
        assert weekly.monotony == 2.0
        assert weekly.strain == 700.0
        assert weekly.formula_version == "foster@1.0.0"
