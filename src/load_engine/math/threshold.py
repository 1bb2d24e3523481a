"""LTHR estimation from sustained hard efforts.

Field-test heuristic (Friel): average HR over a sustained effort of at
least 20 minutes approximates LTHR, scaled down for shorter efforts.
"""

from __future__ import annotations

from load_engine.models.enums import (
    LTHR_ACTIVITY_TYPES,
    LTHR_EFFORT_FRACTIONS,
    LTHR_LONG_EFFORT_FRACTION,
    LTHR_MIN_EFFORT_S,
)


def estimate_lthr(
    activity_type: str,
    average_heartrate: float | None,
    moving_time_s: float,
    current_lthr: float | None = None,
) -> int | None:
    """Suggest a new LTHR, or None when the effort does not raise it.

    LTHR rarely drops quickly, so only increases are suggested.
    """
    if activity_type not in LTHR_ACTIVITY_TYPES:
        return None
    if not average_heartrate or moving_time_s < LTHR_MIN_EFFORT_S:
        return None

    short_upper, short_fraction = LTHR_EFFORT_FRACTIONS[0]
    medium_upper, medium_fraction = LTHR_EFFORT_FRACTIONS[1]
    if moving_time_s < short_upper:
        fraction = short_fraction
    elif moving_time_s <= medium_upper:
        fraction = medium_fraction
    else:
        fraction = LTHR_LONG_EFFORT_FRACTION

    estimated = round(average_heartrate * fraction)
    if estimated > 0 and estimated > (current_lthr or 0):
        return estimated
    return None
