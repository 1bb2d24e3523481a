"""Forward projection of CTL/ATL/TSB under full rest, for peak-form forecasting."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from load_engine.math.smoothing import LoadState, run_recurrence
from load_engine.models.enums import DEFAULT_PROJECTION_DAYS
from load_engine.models.load_profile import DailyLoadProfile


def project_tsb(
    current: DailyLoadProfile,
    days_to_project: int = DEFAULT_PROJECTION_DAYS,
    calculated_at: datetime | None = None,
) -> list[DailyLoadProfile]:
    """Simulate the next *days_to_project* days with zero daily load."""
    steps = run_recurrence(
        [0.0] * max(days_to_project, 0), seed=LoadState(ctl=current.ctl, atl=current.atl)
    )
    return [
        DailyLoadProfile(
            athlete_id=current.athlete_id,
            date=current.date + timedelta(days=offset),
            daily_trimp=0.0,
            ctl=step.ctl,
            atl=step.atl,
            tsb=step.tsb,
            acwr=step.acwr,
            formula_version=current.formula_version,
            calculated_at=calculated_at,
        )
        for offset, step in enumerate(steps, start=1)
    ]


def find_peak_day(projections: Sequence[DailyLoadProfile]) -> DailyLoadProfile | None:
    """Projected day with the highest TSB; ties go to the latest date."""
    if not projections:
        return None
    return max(projections, key=lambda p: (p.tsb, p.date))
