"""Per-activity load computation: zone resolution, model selection, snapshot.

Pure: takes the activity, its streams and the athlete's settings and
returns the ActivityLoad record to persist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

import numpy as np

from load_engine.math.performance import activity_intensity_factor, calculate_ef
from load_engine.math.training_load import (
    FormaLoadConfig,
    calculate_forma_load,
    calculate_zonal_trimp,
    estimate_trimp,
    estimated_zone_times,
)
from load_engine.math.zones import calculate_time_in_zones, resolve_hr_zones
from load_engine.models.activity import ActivityLoad, ActivityStreams, ActivitySummary
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.enums import FORMULA_VERSION, STATIC_MAX_HR, LoadModel, ZoneModelType
from load_engine.models.zone_model import HrZone


@dataclass(frozen=True)
class ResolvedZones:
    zones: tuple[HrZone, ...]
    type: ZoneModelType
    max_hr: float


def resolve_activity_zones(
    profile: AthleteProfile, thresholds: AthleteThresholds, as_of: date | None = None
) -> ResolvedZones:
    """Custom zones win over the LTHR / age / static resolver."""
    if thresholds.hr_zones:
        zones = tuple(thresholds.hr_zones)
        return ResolvedZones(
            zones=zones, type=ZoneModelType.CUSTOM, max_hr=zones[-1].max or STATIC_MAX_HR
        )
    result = resolve_hr_zones(profile.lthr, profile.birth_date, as_of=as_of)
    return ResolvedZones(zones=result.zones, type=result.type, max_hr=result.estimated_max_hr)


def effective_model(requested: LoadModel, streams: ActivityStreams) -> LoadModel:
    """Missing HR data always falls back to estimation."""
    if not streams.has_heartrate:
        return LoadModel.ESTIMATED
    return requested


def formula_stamp(model: LoadModel) -> str:
    return f"{model.value}@{FORMULA_VERSION}"


def compute_activity_load(
    activity: ActivitySummary,
    streams: ActivityStreams,
    profile: AthleteProfile,
    thresholds: AthleteThresholds,
    model: LoadModel = LoadModel.EDWARDS,
    calculated_at: datetime | None = None,
) -> ActivityLoad:
    """Build the ActivityLoad for one activity with the requested model.

    Without a heart-rate stream the estimation model is used regardless of
    *model*, so the daily load chain stays unbroken.
    """
    resolved = resolve_activity_zones(profile, thresholds, as_of=activity.local_date)
    hr = streams.heartrate
    avg_hr = float(np.mean(hr)) if hr else 0.0

    intensity_factor = activity_intensity_factor(
        activity.type,
        activity.average_speed,
        avg_hr,
        profile.lthr,
        thresholds.threshold_pace,
        thresholds.threshold_power,
    )
    efficiency = calculate_ef(activity.average_speed, avg_hr)

    used = effective_model(model, streams)
    if used is LoadModel.FORMA:
        config = FormaLoadConfig(
            max_hr=resolved.max_hr, rest_hr=profile.resting_hr, gender=profile.gender
        )
        trimp = calculate_forma_load(hr, config, streams.time)
        zone_times = calculate_time_in_zones(hr, resolved.zones, streams.time)
    elif used is LoadModel.EDWARDS:
        zone_times = calculate_time_in_zones(hr, resolved.zones, streams.time)
        trimp = calculate_zonal_trimp(zone_times)
    elif used is LoadModel.ESTIMATED:
        trimp = estimate_trimp(activity.moving_time, intensity_factor)
        zone_times = estimated_zone_times(activity.moving_time, intensity_factor)
    else:
        raise AssertionError(f"Unhandled load model: {used!r}")

    return ActivityLoad(
        activity_id=activity.activity_id,
        athlete_id=activity.athlete_id,
        activity_date=activity.local_date,
        trimp_score=trimp,
        hr_zones_time=tuple(zone_times),
        formula_version=formula_stamp(used),
        zone_model_type=resolved.type,
        zone_snapshot=resolved.zones,
        intensity_factor=intensity_factor,
        aerobic_efficiency=efficiency,
        calculated_at=calculated_at,
    )
