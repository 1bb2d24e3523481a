"""Convert engine records to and from JSON-compatible rows.

Dates become ISO strings, enums their values, zone snapshots lists of
dicts. Row keys match the persisted column names.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from load_engine.models.activity import ActivityLoad
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.enums import (
    DEFAULT_RESTING_HR,
    DEFAULT_THRESHOLD_PACE_S_PER_KM,
    DEFAULT_THRESHOLD_POWER_W,
    Gender,
    ZoneModelType,
)
from load_engine.models.load_profile import (
    DailyLoadProfile,
    TrainingSnapshot,
    WeeklyLoadProfile,
)
from load_engine.models.zone_model import HrZone


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


# ---------------------------------------------------------------------------
# Daily / weekly profiles
# ---------------------------------------------------------------------------


def daily_profile_to_row(profile: DailyLoadProfile) -> dict[str, Any]:
    return {
        "athlete_id": profile.athlete_id,
        "date": profile.date.isoformat(),
        "daily_trimp": profile.daily_trimp,
        "ctl": profile.ctl,
        "atl": profile.atl,
        "tsb": profile.tsb,
        "acwr": profile.acwr,
        "formula_version": profile.formula_version,
        "calculated_at": _iso(profile.calculated_at),
    }


def daily_profile_from_row(row: dict[str, Any]) -> DailyLoadProfile:
    return DailyLoadProfile(
        athlete_id=str(row["athlete_id"]),
        date=date.fromisoformat(row["date"]),
        daily_trimp=float(row["daily_trimp"]),
        ctl=float(row["ctl"]),
        atl=float(row["atl"]),
        tsb=float(row["tsb"]),
        acwr=float(row.get("acwr") or 0.0),
        formula_version=str(row["formula_version"]),
        calculated_at=_parse_datetime(row.get("calculated_at")),
    )


def weekly_profile_to_row(profile: WeeklyLoadProfile) -> dict[str, Any]:
    return {
        "athlete_id": profile.athlete_id,
        "week_start_date": profile.week_start_date.isoformat(),
        "total_trimp": profile.total_trimp,
        "monotony": profile.monotony,
        "strain": profile.strain,
        "formula_version": profile.formula_version,
        "calculated_at": _iso(profile.calculated_at),
    }


def weekly_profile_from_row(row: dict[str, Any]) -> WeeklyLoadProfile:
    return WeeklyLoadProfile(
        athlete_id=str(row["athlete_id"]),
        week_start_date=date.fromisoformat(row["week_start_date"]),
        total_trimp=float(row["total_trimp"]),
        monotony=float(row["monotony"]),
        strain=float(row["strain"]),
        formula_version=str(row["formula_version"]),
        calculated_at=_parse_datetime(row.get("calculated_at")),
    )


# ---------------------------------------------------------------------------
# Activity loads
# ---------------------------------------------------------------------------


def activity_load_to_row(load: ActivityLoad) -> dict[str, Any]:
    return {
        "activity_id": load.activity_id,
        "athlete_id": load.athlete_id,
        "activity_date": load.activity_date.isoformat(),
        "trimp_score": load.trimp_score,
        "hr_zones_time": list(load.hr_zones_time),
        "formula_version": load.formula_version,
        "zone_model_type": load.zone_model_type.value,
        "zone_snapshot": [z.to_dict() for z in load.zone_snapshot],
        "intensity_factor": load.intensity_factor,
        "aerobic_efficiency": load.aerobic_efficiency,
        "calculated_at": _iso(load.calculated_at),
    }


def activity_load_from_row(row: dict[str, Any]) -> ActivityLoad:
    return ActivityLoad(
        activity_id=str(row["activity_id"]),
        athlete_id=str(row["athlete_id"]),
        activity_date=date.fromisoformat(row["activity_date"]),
        trimp_score=float(row["trimp_score"]),
        hr_zones_time=tuple(float(t) for t in row["hr_zones_time"]),
        formula_version=str(row["formula_version"]),
        zone_model_type=ZoneModelType(row["zone_model_type"]),
        zone_snapshot=tuple(HrZone.from_dict(z) for z in row.get("zone_snapshot") or []),
        intensity_factor=float(row.get("intensity_factor") or 0.0),
        aerobic_efficiency=float(row.get("aerobic_efficiency") or 0.0),
        calculated_at=_parse_datetime(row.get("calculated_at")),
    )


# ---------------------------------------------------------------------------
# Athlete settings
# ---------------------------------------------------------------------------


def athlete_profile_to_row(profile: AthleteProfile) -> dict[str, Any]:
    birth = profile.birth_date
    return {
        "athlete_id": profile.athlete_id,
        "lthr": profile.lthr,
        "birth_date": birth.isoformat() if isinstance(birth, date) else birth,
        "gender": profile.gender.value,
        "resting_hr": profile.resting_hr,
        "suggested_lthr": profile.suggested_lthr,
    }


def athlete_profile_from_row(row: dict[str, Any]) -> AthleteProfile:
    return AthleteProfile(
        athlete_id=str(row["athlete_id"]),
        lthr=row.get("lthr"),
        birth_date=row.get("birth_date"),
        gender=Gender(row.get("gender") or Gender.MALE.value),
        resting_hr=int(row.get("resting_hr") or DEFAULT_RESTING_HR),
        suggested_lthr=row.get("suggested_lthr"),
    )


def thresholds_to_row(thresholds: AthleteThresholds) -> dict[str, Any]:
    return {
        "threshold_pace": thresholds.threshold_pace,
        "threshold_power": thresholds.threshold_power,
        "hr_zones": (
            [z.to_dict() for z in thresholds.hr_zones] if thresholds.hr_zones else None
        ),
    }


def thresholds_from_row(row: dict[str, Any]) -> AthleteThresholds:
    zones = row.get("hr_zones")
    return AthleteThresholds(
        threshold_pace=float(row.get("threshold_pace") or DEFAULT_THRESHOLD_PACE_S_PER_KM),
        threshold_power=float(row.get("threshold_power") or DEFAULT_THRESHOLD_POWER_W),
        hr_zones=tuple(HrZone.from_dict(z) for z in zones) if zones else None,
    )


# ---------------------------------------------------------------------------
# Snapshot payload
# ---------------------------------------------------------------------------


def snapshot_to_dict(snapshot: TrainingSnapshot) -> dict[str, Any]:
    """JSON-ready training snapshot for the coaching text collaborator."""
    return {
        "current_profile": daily_profile_to_row(snapshot.current_profile),
        "recent_week": (
            weekly_profile_to_row(snapshot.recent_week) if snapshot.recent_week else None
        ),
        "next_workouts": list(snapshot.next_workouts),
        "generated_at": _iso(snapshot.generated_at),
    }
