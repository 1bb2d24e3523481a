"""Athlete inputs consumed by the zone resolver and load models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from load_engine.models.enums import (
    DEFAULT_RESTING_HR,
    DEFAULT_THRESHOLD_PACE_S_PER_KM,
    DEFAULT_THRESHOLD_POWER_W,
    Gender,
)
from load_engine.models.zone_model import HrZone


@dataclass(frozen=True)
class AthleteProfile:
    """Physiological profile fragment for one athlete.

    Every field except the id is optional; the zone resolver falls back
    through LTHR, age and a static default.
    """

    athlete_id: str
    lthr: float | None = None
    birth_date: date | str | None = None
    gender: Gender = Gender.MALE
    resting_hr: int = DEFAULT_RESTING_HR
    suggested_lthr: int | None = None


@dataclass(frozen=True)
class AthleteThresholds:
    """Per-athlete performance thresholds with documented defaults."""

    threshold_pace: float = DEFAULT_THRESHOLD_PACE_S_PER_KM  # s/km
    threshold_power: float = DEFAULT_THRESHOLD_POWER_W  # W
    hr_zones: tuple[HrZone, ...] | None = None  # Custom zones override
