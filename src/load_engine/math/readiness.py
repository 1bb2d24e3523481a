"""Event readiness, trend, risk and taper projection.

Readiness (0-100) blends three components:
    accumulation: current CTL against a distance-derived target
    specificity:  longest same-sport effort in 30 days vs 80% of distance
    consistency:  share of the last 4 weeks with >= 3 h moving time

ACWR risk bands follow Gabbett (2016); the taper window follows
Bosquet et al. (2007).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Sequence

from load_engine.math.smoothing import calculate_acwr
from load_engine.math.weekly import week_start
from load_engine.models.activity import ActivitySummary
from load_engine.models.enums import (
    ACWR_OPTIMAL_HIGH,
    ACWR_OPTIMAL_LOW,
    BUILDING_MIN_TSB,
    CONSISTENCY_MIN_WEEKLY_S,
    CONSISTENCY_WEEKS,
    PRIME_TSB_HIGH,
    PRIME_TSB_LOW,
    READINESS_WEIGHT_ACCUMULATION,
    READINESS_WEIGHT_CONSISTENCY,
    READINESS_WEIGHT_SPECIFICITY,
    SPECIFICITY_WINDOW_DAYS,
    TAPER_ATL_FRACTION,
    TAPER_WINDOW_DAYS,
    TARGET_CTL_PER_KM,
    TARGET_LONG_RUN_FRACTION,
    TREND_DELTA_THRESHOLD,
    ProjectionStatus,
    ReadinessTrend,
    RiskLevel,
)
from load_engine.models.readiness import ReadinessScore


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def get_target_ctl(distance_m: float) -> float:
    return (distance_m / 1000.0) * TARGET_CTL_PER_KM


def get_target_long_run_distance(distance_m: float) -> float:
    return distance_m * TARGET_LONG_RUN_FRACTION


def max_distance_in_window(
    activities: Sequence[ActivitySummary], activity_type: str, ref_date: date
) -> float:
    """Longest same-type activity in the 30 days ending at *ref_date*."""
    window_start = ref_date - timedelta(days=SPECIFICITY_WINDOW_DAYS)
    distances = [
        a.distance
        for a in activities
        if a.type == activity_type and window_start <= a.local_date <= ref_date
    ]
    return max(distances, default=0.0)


def calculate_consistency_score(
    activities: Sequence[ActivitySummary], ref_date: date
) -> float:
    """Percentage of the last 4 Monday-anchored weeks with >= 3 h moving time."""
    passed = 0
    for i in range(CONSISTENCY_WEEKS):
        start = week_start(ref_date - timedelta(days=7 * i))
        end = start + timedelta(days=6)
        seconds = sum(a.moving_time or 0 for a in activities if start <= a.local_date <= end)
        if seconds >= CONSISTENCY_MIN_WEEKLY_S:
            passed += 1
    return passed / CONSISTENCY_WEEKS * 100.0


def calculate_readiness_score(
    ctl: float,
    activities: Sequence[ActivitySummary],
    activity_type: str,
    target_distance_m: float,
    ref_date: date | datetime | str | None = None,
) -> ReadinessScore:
    """Event readiness score with its three components.

    Args:
        ctl: Current chronic load.
        activities: Athlete activities (any sport; consistency counts all).
        activity_type: Sport of the event, e.g. "Run".
        target_distance_m: Event distance in meters.
        ref_date: Date the score is computed for (default: today).
    """
    ref = _as_date(ref_date) if ref_date is not None else date.today()

    target_ctl = get_target_ctl(target_distance_m)
    accumulation = min(ctl / target_ctl * 100.0, 100.0) if target_ctl > 0 else 100.0

    target_long_run = get_target_long_run_distance(target_distance_m)
    longest = max_distance_in_window(activities, activity_type, ref)
    specificity = (
        min(longest / target_long_run * 100.0, 100.0) if target_long_run > 0 else 100.0
    )

    consistency = calculate_consistency_score(activities, ref)

    total = round(
        accumulation * READINESS_WEIGHT_ACCUMULATION
        + specificity * READINESS_WEIGHT_SPECIFICITY
        + consistency * READINESS_WEIGHT_CONSISTENCY
    )
    return ReadinessScore(
        accumulation_score=accumulation,
        specificity_score=specificity,
        consistency_score=consistency,
        total_score=int(total),
    )


def calculate_trend(current_score: float, previous_score: float) -> ReadinessTrend:
    delta = current_score - previous_score
    if delta > TREND_DELTA_THRESHOLD:
        return ReadinessTrend.POSITIVE
    if delta < -TREND_DELTA_THRESHOLD:
        return ReadinessTrend.NEGATIVE
    return ReadinessTrend.STABLE


def get_days_remaining(
    event_date: date | datetime | str, today: date | datetime | str | None = None
) -> int:
    """Whole calendar days until the event, never negative."""
    current = _as_date(today) if today is not None else date.today()
    return max(0, (_as_date(event_date) - current).days)


def get_risk_level(ctl: float, atl: float) -> RiskLevel:
    """Classify injury risk from the acute:chronic ratio."""
    acwr = calculate_acwr(atl, ctl)
    if acwr < ACWR_OPTIMAL_LOW:
        return RiskLevel.UNDERREACHING
    if acwr > ACWR_OPTIMAL_HIGH:
        return RiskLevel.OVERREACHING
    return RiskLevel.OPTIMAL


def get_projection_status(
    event_date: date | datetime | str | None,
    ctl: float,
    atl: float,
    today: date | datetime | str | None = None,
) -> ProjectionStatus:
    """Whether the athlete is on track to arrive fresh at the event.

    Outside the 14-day taper window the athlete is "building" unless form
    is already below -20. Inside it, ATL is projected down to 40% (an
    ideal taper) and a projected TSB in [5, 15] is "prime".
    """
    if event_date is None:
        return ProjectionStatus.UNKNOWN

    days_left = get_days_remaining(event_date, today)
    if days_left > TAPER_WINDOW_DAYS:
        if ctl - atl >= BUILDING_MIN_TSB:
            return ProjectionStatus.BUILDING
        return ProjectionStatus.NEEDS_TAPERING

    projected_tsb = ctl - atl * TAPER_ATL_FRACTION
    if PRIME_TSB_LOW <= projected_tsb <= PRIME_TSB_HIGH:
        return ProjectionStatus.PRIME
    return ProjectionStatus.BUILDING
