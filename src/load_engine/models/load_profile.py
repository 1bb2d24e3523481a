"""Daily and weekly load profiles produced by the chain sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class DailyLoadProfile:
    """One row per (athlete, calendar date).

    ``tsb`` uses the previous day's ctl/atl; ``acwr`` uses this day's.
    """

    athlete_id: str
    date: date
    daily_trimp: float
    ctl: float
    atl: float
    tsb: float
    acwr: float
    formula_version: str
    calculated_at: datetime | None = None


@dataclass(frozen=True)
class WeeklyLoadProfile:
    """One row per (athlete, Monday week start)."""

    athlete_id: str
    week_start_date: date
    total_trimp: float
    monotony: float
    strain: float
    formula_version: str
    calculated_at: datetime | None = None


@dataclass(frozen=True)
class TrainingSnapshot:
    """Decoupled payload for downstream consumers (UI, coaching text)."""

    current_profile: DailyLoadProfile
    recent_week: WeeklyLoadProfile | None
    next_workouts: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    generated_at: datetime | None = None
