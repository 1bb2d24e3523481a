"""Pure functions mapping Garmin API response dicts to load engine inputs.

No I/O: takes raw dicts from GarminClient methods and returns
ActivitySummary, ActivityStreams and AthleteProfile values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from load_engine.exceptions import ActivitySourceError
from load_engine.models.activity import ActivityStreams, ActivitySummary
from load_engine.models.athlete import AthleteProfile
from load_engine.models.enums import Gender

# Garmin typeKey -> engine activity type
_TYPE_MAP = {
    "running": "Run",
    "trail_running": "Run",
    "treadmill_running": "Run",
    "track_running": "Run",
    "cycling": "Ride",
    "road_biking": "Ride",
    "mountain_biking": "Ride",
    "gravel_cycling": "Ride",
    "indoor_cycling": "Ride",
    "virtual_ride": "Ride",
    "lap_swimming": "Swim",
    "open_water_swimming": "Swim",
    "walking": "Walk",
    "hiking": "Hike",
}

_HR_KEY = "directHeartRate"
_SPEED_KEY = "directSpeed"
_TIME_KEYS = ("sumElapsedDuration", "sumDuration")


def map_activity_type(type_key: str | None) -> str:
    if not type_key:
        return "Workout"
    return _TYPE_MAP.get(type_key, type_key.replace("_", " ").title().replace(" ", ""))


def _parse_local_start(value: Any) -> Optional[datetime]:
    """Parse '2025-01-15 07:30:00' or '2025-01-15T07:30:00.0'."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace(" ", "T")[:19])
    except ValueError:
        return None


def _require_start(value: Any, activity_id: Any) -> datetime:
    start = _parse_local_start(value)
    if start is None:
        raise ActivitySourceError(
            f"Activity {activity_id} has no usable startTimeLocal: {value!r}"
        )
    return start


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Activity summaries
# ---------------------------------------------------------------------------


def map_activity_summary(raw: dict[str, Any], athlete_id: str) -> ActivitySummary:
    """Map a get_activity() response (summaryDTO layout).

    Raises:
        ActivitySourceError: if the start time is missing or unparseable.
    """
    summary = raw.get("summaryDTO") or {}
    type_dto = raw.get("activityTypeDTO") or {}
    start = _require_start(summary.get("startTimeLocal"), raw.get("activityId"))
    avg_hr = summary.get("averageHR")
    return ActivitySummary(
        activity_id=str(raw.get("activityId")),
        athlete_id=athlete_id,
        type=map_activity_type(type_dto.get("typeKey")),
        start_date_local=start,
        moving_time=_float(summary.get("movingDuration") or summary.get("duration")),
        distance=_float(summary.get("distance")),
        average_speed=_float(summary.get("averageSpeed")),
        average_heartrate=_float(avg_hr) if avg_hr is not None else None,
    )


def map_activity_list_entry(entry: dict[str, Any], athlete_id: str) -> ActivitySummary:
    """Map one entry of get_activities_by_date() (flat layout).

    Raises:
        ActivitySourceError: if the start time is missing or unparseable.
    """
    type_info = entry.get("activityType") or {}
    start = _require_start(entry.get("startTimeLocal"), entry.get("activityId"))
    avg_hr = entry.get("averageHR")
    return ActivitySummary(
        activity_id=str(entry.get("activityId")),
        athlete_id=athlete_id,
        type=map_activity_type(type_info.get("typeKey")),
        start_date_local=start,
        moving_time=_float(entry.get("movingDuration") or entry.get("duration")),
        distance=_float(entry.get("distance")),
        average_speed=_float(entry.get("averageSpeed")),
        average_heartrate=_float(avg_hr) if avg_hr is not None else None,
    )


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------


def _metric_indexes(descriptors: list[dict[str, Any]]) -> dict[str, int]:
    indexes: dict[str, int] = {}
    for descriptor in descriptors:
        key = descriptor.get("key")
        index = descriptor.get("metricsIndex")
        if key is not None and index is not None:
            indexes[key] = int(index)
    return indexes


def map_activity_streams(details: dict[str, Any]) -> ActivityStreams:
    """Map get_activity_details() into aligned HR / time / velocity streams.

    Samples without a heart rate are dropped so the streams stay aligned.
    A time or velocity stream is only returned when every kept sample has
    a value for it.
    """
    if not details:
        return ActivityStreams()

    indexes = _metric_indexes(details.get("metricDescriptors") or [])
    hr_index = indexes.get(_HR_KEY)
    if hr_index is None:
        return ActivityStreams()
    speed_index = indexes.get(_SPEED_KEY)
    time_index = next((indexes[k] for k in _TIME_KEYS if k in indexes), None)

    heartrate: list[float] = []
    times: list[Optional[float]] = []
    velocity: list[Optional[float]] = []
    for sample in details.get("activityDetailMetrics") or []:
        metrics = sample.get("metrics") or []
        if hr_index >= len(metrics) or metrics[hr_index] is None:
            continue
        heartrate.append(float(metrics[hr_index]))
        times.append(_value_at(metrics, time_index))
        velocity.append(_value_at(metrics, speed_index))

    return ActivityStreams(
        heartrate=tuple(heartrate),
        time=_complete(times),
        velocity=_complete(velocity),
    )


def _value_at(metrics: list[Any], index: Optional[int]) -> Optional[float]:
    if index is None or index >= len(metrics) or metrics[index] is None:
        return None
    return float(metrics[index])


def _complete(values: list[Optional[float]]) -> Optional[tuple[float, ...]]:
    if not values or any(v is None for v in values):
        return None
    return tuple(values)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Athlete profile
# ---------------------------------------------------------------------------


def map_athlete_profile(
    raw: dict[str, Any], athlete_id: str, base: AthleteProfile | None = None
) -> AthleteProfile:
    """Map a pull_profile() result onto an AthleteProfile.

    Fields Garmin does not provide keep their values from *base*.
    """
    profile = base or AthleteProfile(athlete_id=athlete_id)
    settings = raw.get("user_settings") or {}
    user_data = (settings.get("userData") or {}) if isinstance(settings, dict) else {}

    gender = profile.gender
    raw_gender = user_data.get("gender")
    if raw_gender:
        gender = Gender.FEMALE if str(raw_gender).upper() in ("FEMALE", "F") else Gender.MALE

    birth_date = profile.birth_date
    if user_data.get("birthDate"):
        birth_date = str(user_data["birthDate"])[:10]

    lthr = _extract_lthr(raw.get("lactate_threshold")) or user_data.get(
        "lactateThresholdHeartRate"
    )

    return AthleteProfile(
        athlete_id=athlete_id,
        lthr=float(lthr) if lthr else profile.lthr,
        birth_date=birth_date,
        gender=gender,
        resting_hr=profile.resting_hr,
        suggested_lthr=profile.suggested_lthr,
    )


def _extract_lthr(data: Any) -> Optional[float]:
    """Path: speed_and_heart_rate.heartRate"""
    if not isinstance(data, dict):
        return None
    sahr = data.get("speed_and_heart_rate")
    if not isinstance(sahr, dict):
        return None
    value = sahr.get("heartRate")
    try:
        return float(value) if value else None
    except (TypeError, ValueError):
        return None
