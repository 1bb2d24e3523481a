"""Heart rate zone resolution and time-in-zone accumulation.

Zone models, first match wins:
    1. LTHR (Friel): zone tops at 85/89/94/99% LTHR.
    2. Age-predicted HRmax (220 - age): zone tops at 60/70/80/90% HRmax.
    3. Static default anchored at HRmax 190.

Reference: Friel (2009), The Triathlete's Training Bible.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Sequence

from load_engine.models.enums import (
    AGE_HRMAX_BASE,
    HRMAX_ZONE_UPPER_PCT,
    LTHR_TO_MAX_HR_RATIO,
    LTHR_ZONE_UPPER_PCT,
    MAX_SAMPLE_GAP_S,
    STATIC_MAX_HR,
    STATIC_ZONE_UPPER_BPM,
    ZONAL_TRIMP_WEIGHTS,
    ZONE_CEILING_BPM,
    ZoneModelType,
    ZoneType,
)
from load_engine.models.zone_model import HrZone, ZoneModelResult

_LTHR_LABELS = ("Recovery", "Endurance", "Tempo", "Threshold", "Anaerobic")
_GENERIC_LABELS = ("Z1", "Z2", "Z3", "Z4", "Z5")


def _build_zones(uppers: Sequence[float], labels: Sequence[str]) -> tuple[HrZone, ...]:
    """Build 5 contiguous zones from the upper bounds of zones 1-4."""
    zones: list[HrZone] = []
    lower = 0
    for zone_number, (upper, label) in enumerate(zip(uppers, labels), start=1):
        zones.append(HrZone(zone=zone_number, min=lower, max=upper, label=label))
        lower = upper + 1
    zones.append(HrZone(zone=5, min=lower, max=ZONE_CEILING_BPM, label=labels[4]))
    return tuple(zones)


def calculate_age(birth_date: date, as_of: date) -> int:
    """Age in whole years by calendar year/month/day subtraction."""
    age = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def _parse_birth_date(value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def resolve_hr_zones(
    lthr: float | None = None,
    birth_date: date | str | None = None,
    as_of: date | None = None,
) -> ZoneModelResult:
    """Resolve an athlete's 5-zone HR model.

    Total function: any input, including non-finite or unparseable values,
    falls through to the next strategy and ultimately to the static default.

    Args:
        lthr: Lactate threshold heart rate in bpm.
        birth_date: Date of birth (date or ISO string).
        as_of: Reference date for the age calculation (default: today).
    """
    if lthr is not None and math.isfinite(lthr) and lthr > 0:
        uppers = [math.floor(lthr * pct) for pct in LTHR_ZONE_UPPER_PCT]
        return ZoneModelResult(
            zones=_build_zones(uppers, _LTHR_LABELS),
            type=ZoneModelType.LTHR_FRIEL,
            source_value=lthr,
            estimated_max_hr=round(lthr / LTHR_TO_MAX_HR_RATIO),
        )

    born = _parse_birth_date(birth_date)
    if born is not None:
        hr_max = AGE_HRMAX_BASE - calculate_age(born, as_of or date.today())
        uppers = [math.floor(hr_max * pct) for pct in HRMAX_ZONE_UPPER_PCT]
        return ZoneModelResult(
            zones=_build_zones(uppers, _GENERIC_LABELS),
            type=ZoneModelType.HRMAX_AGE,
            source_value=hr_max,
            estimated_max_hr=hr_max,
        )

    return ZoneModelResult(
        zones=_build_zones(STATIC_ZONE_UPPER_BPM, _GENERIC_LABELS),
        type=ZoneModelType.STATIC,
        source_value=STATIC_MAX_HR,
        estimated_max_hr=STATIC_MAX_HR,
    )


def get_zone_for_hr(hr: float, zones: Sequence[HrZone]) -> int:
    """Map a heart rate to its zone number.

    Zones are treated as contiguous: a value is in the first zone whose
    upper bound it does not exceed. Values above the last zone map to it.
    """
    for zone in zones:
        if hr <= zone.max:
            return zone.zone
    return zones[-1].zone


def get_trimp_weight_for_zone(zone: int) -> float:
    """Zonal TRIMP weight for a zone number; unknown zones weigh 1.0."""
    try:
        return ZONAL_TRIMP_WEIGHTS[ZoneType(zone)]
    except ValueError:
        return 1.0


def _bucket(hr: float, zones: Sequence[HrZone]) -> int:
    return min(max(get_zone_for_hr(hr, zones), 1), 5) - 1


def calculate_time_in_zones(
    hr_stream: Sequence[float],
    zones: Sequence[HrZone],
    time_stream: Sequence[float] | None = None,
) -> list[float]:
    """Seconds spent in each of the 5 zones.

    Without a matching time stream each sample counts as one second.
    With one, each sample is credited with the delta to the next sample;
    deltas <= 0 (non-monotonic) or > 30 s (pauses) are skipped.
    """
    times = [0.0] * 5
    if not hr_stream or not zones:
        return times

    if time_stream is None or len(time_stream) != len(hr_stream):
        for hr in hr_stream:
            times[_bucket(hr, zones)] += 1.0
        return times

    for i in range(len(hr_stream) - 1):
        delta = time_stream[i + 1] - time_stream[i]
        if delta <= 0 or delta > MAX_SAMPLE_GAP_S:
            continue
        times[_bucket(hr_stream[i], zones)] += delta
    return times
