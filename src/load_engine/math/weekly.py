"""Weekly variability: monotony and strain over Monday-anchored weeks.

Reference:
    Foster (1998). Monitoring training in athletes with reference to
    overtraining syndrome. Med Sci Sports Exerc 30(7):1164-1168.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from load_engine.models.enums import DAYS_PER_WEEK, MONOTONY_CAP, WEEKLY_FORMULA_TAG
from load_engine.models.load_profile import DailyLoadProfile, WeeklyLoadProfile


def calculate_monotony(daily_loads: Sequence[float]) -> float:
    """Training monotony: mean / population std of daily loads.

    Returns 0.0 for an empty window or an all-rest week, and the 2.0 cap
    when every day carries the same nonzero load (std == 0).
    """
    if len(daily_loads) == 0:
        return 0.0
    loads = np.asarray(daily_loads, dtype=np.float64)
    mean = float(np.mean(loads))
    if mean == 0:
        return 0.0
    std = float(np.std(loads, ddof=0))
    # Float noise on identical values must not turn the cap into a huge ratio
    if std <= 1e-12 * abs(mean):
        return MONOTONY_CAP
    return mean / std


def calculate_strain(total_weekly_load: float, monotony: float) -> float:
    """Training strain: total weekly load x monotony."""
    return total_weekly_load * monotony


def week_start(day: date) -> date:
    """Monday of the week containing *day*."""
    return day - timedelta(days=day.weekday())


def group_daily_loads_by_week(
    profiles: Iterable[DailyLoadProfile],
) -> dict[date, list[float]]:
    """Arrange daily loads into 7-slot Monday-first weeks; missing days are 0."""
    rows = [(p.date, p.daily_trimp) for p in profiles]
    if not rows:
        return {}
    frame = pd.DataFrame(rows, columns=["date", "daily_trimp"])
    frame["week_start"] = frame["date"].map(week_start)
    frame["weekday"] = frame["date"].map(lambda d: d.weekday())

    weeks: dict[date, list[float]] = {}
    for week, group in frame.groupby("week_start", sort=True):
        slots = [0.0] * DAYS_PER_WEEK
        for weekday, load in zip(group["weekday"], group["daily_trimp"]):
            slots[int(weekday)] = float(load)
        weeks[week] = slots
    return weeks


def build_weekly_profiles(
    athlete_id: str,
    profiles: Iterable[DailyLoadProfile],
    calculated_at: datetime | None = None,
) -> list[WeeklyLoadProfile]:
    """Derive one WeeklyLoadProfile per week that has any daily profile."""
    weekly: list[WeeklyLoadProfile] = []
    for week, loads in group_daily_loads_by_week(profiles).items():
        total = float(sum(loads))
        monotony = calculate_monotony(loads)
        weekly.append(
            WeeklyLoadProfile(
                athlete_id=athlete_id,
                week_start_date=week,
                total_trimp=total,
                monotony=monotony,
                strain=calculate_strain(total, monotony),
                formula_version=WEEKLY_FORMULA_TAG,
                calculated_at=calculated_at,
            )
        )
    return weekly
