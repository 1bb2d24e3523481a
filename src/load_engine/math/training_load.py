"""Per-activity training load models: zonal, continuous exponential, estimated.

References:
    - Edwards (1993): zone-weighted TRIMP
    - Banister (1991): exponential heart-rate-reserve TRIMP
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from load_engine.exceptions import InvalidInputError
from load_engine.models.enums import (
    BANISTER_COEFFICIENT,
    BANISTER_EXPONENT_FEMALE,
    BANISTER_EXPONENT_MALE,
    EDWARDS_MULTIPLIERS,
    INTENSITY_CLASS_UPPER_IF,
    MAX_SAMPLE_GAP_S,
    Gender,
)
from load_engine.math.zones import get_trimp_weight_for_zone


def _require_five_zones(time_in_zones_s: Sequence[float]) -> None:
    if len(time_in_zones_s) != 5:
        raise InvalidInputError(
            f"time in zones must have exactly 5 elements, got {len(time_in_zones_s)}"
        )


def calculate_edwards_trimp(time_in_zones_s: Sequence[float]) -> float:
    """Classic Edwards TRIMP: sum of minutes in zone x zone number (1-5).

    Args:
        time_in_zones_s: Exactly 5 durations in seconds, zones 1 to 5.

    Returns:
        TRIMP rounded to one decimal.

    Raises:
        InvalidInputError: if the input does not have exactly 5 elements.
    """
    _require_five_zones(time_in_zones_s)
    total = sum(
        (seconds / 60.0) * multiplier
        for seconds, multiplier in zip(time_in_zones_s, EDWARDS_MULTIPLIERS)
    )
    return round(total, 1)


def calculate_zonal_trimp(time_in_zones_s: Sequence[float]) -> float:
    """Weighted zonal TRIMP: sum of minutes in zone x zone weight (1.0-1.5).

    Raises:
        InvalidInputError: if the input does not have exactly 5 elements.
    """
    _require_five_zones(time_in_zones_s)
    return sum(
        (seconds / 60.0) * get_trimp_weight_for_zone(zone)
        for zone, seconds in enumerate(time_in_zones_s, start=1)
    )


@dataclass(frozen=True)
class FormaLoadConfig:
    """Physiological inputs for the continuous exponential model."""

    max_hr: float
    rest_hr: float
    gender: Gender = Gender.MALE


def _banister_exponent(gender: Gender | str) -> float:
    if Gender(gender) == Gender.FEMALE:
        return BANISTER_EXPONENT_FEMALE
    return BANISTER_EXPONENT_MALE


def calculate_forma_load(
    hr_stream: Sequence[float],
    config: FormaLoadConfig,
    time_stream: Sequence[float] | None = None,
) -> float:
    """Continuous exponential load over a heart-rate stream.

    For each sample at or above resting HR:
        x = (hr - rest) / (max - rest)
        load += x * 0.64 * e^(b * x) * dt / 60

    with b = 1.92 (male) or 1.67 (female). Without a matching time stream,
    samples are assumed to be 1 Hz. With one, dt is the delta to the next
    sample and deltas <= 0 or > 30 s are skipped.

    Returns:
        Load on a per-minute TRIMP scale; 0.0 for an empty stream or a
        non-positive HR range.
    """
    hr_range = config.max_hr - config.rest_hr
    if hr_range <= 0 or len(hr_stream) == 0:
        return 0.0

    b = _banister_exponent(config.gender)
    hr = np.asarray(hr_stream, dtype=np.float64)

    if time_stream is None or len(time_stream) != len(hr_stream):
        dt = np.ones_like(hr)
    else:
        t = np.asarray(time_stream, dtype=np.float64)
        deltas = np.diff(t)
        dt = np.where((deltas > 0) & (deltas <= MAX_SAMPLE_GAP_S), deltas, 0.0)
        # The last sample has no following delta
        hr = hr[:-1]

    valid = hr >= config.rest_hr
    x = (hr[valid] - config.rest_hr) / hr_range
    contributions = x * BANISTER_COEFFICIENT * np.exp(b * x) * dt[valid]
    return float(contributions.sum() / 60.0)


def estimate_trimp(duration_s: float, intensity_factor: float) -> float:
    """Fallback load when no HR stream exists: minutes x intensity factor."""
    if duration_s <= 0 or intensity_factor <= 0:
        return 0.0
    return (duration_s / 60.0) * intensity_factor


def zone_for_intensity_factor(intensity_factor: float) -> int:
    """Zone implied by an intensity factor (<0.75 zone 1 ... >=1.05 zone 5)."""
    for zone, (upper, _) in enumerate(INTENSITY_CLASS_UPPER_IF[:4], start=1):
        if intensity_factor < upper:
            return zone
    return 5


def estimated_zone_times(duration_s: float, intensity_factor: float) -> list[float]:
    """Attribute the whole fallback duration to the implied zone."""
    times = [0.0] * 5
    if duration_s > 0 and intensity_factor > 0 and math.isfinite(intensity_factor):
        times[zone_for_intensity_factor(intensity_factor) - 1] = float(duration_s)
    return times
