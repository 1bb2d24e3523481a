"""Cardiac drift (aerobic decoupling) within a single activity.

Efficiency per sample is velocity / heart rate. A drop in mean efficiency
from the first to the second half of the valid samples indicates drift.

Reference: Friel (2009), Pa:HR decoupling; >5% suggests limited aerobic
endurance for the effort.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from load_engine.models.enums import (
    DRIFT_MILD_PCT,
    DRIFT_MIN_HR,
    DRIFT_MIN_SAMPLES,
    DRIFT_MIN_VALID_SAMPLES,
    DRIFT_MIN_VELOCITY,
    DRIFT_MODERATE_PCT,
    DRIFT_SEVERE_PCT,
    DriftSeverity,
)
from load_engine.models.readiness import DriftResult

NO_DRIFT = DriftResult(detected=False, severity=DriftSeverity.NONE)


def _classify(drop_pct: float) -> tuple[DriftSeverity, str]:
    if drop_pct < DRIFT_MODERATE_PCT:
        return DriftSeverity.MILD, "Mild drift"
    if drop_pct < DRIFT_SEVERE_PCT:
        return DriftSeverity.MODERATE, "Moderate drift"
    return DriftSeverity.SEVERE, "Severe drift"


def detect_cardiac_drift(
    hr_stream: Sequence[float] | None, velocity_stream: Sequence[float] | None
) -> DriftResult:
    """Detect cardiac drift from paired HR and velocity streams.

    Requires equal-length streams of at least 60 samples and at least 40
    valid samples (HR > 40 bpm, velocity > 0.5 m/s). Anything less reports
    no drift.
    """
    if (
        not hr_stream
        or not velocity_stream
        or len(hr_stream) < DRIFT_MIN_SAMPLES
        or len(hr_stream) != len(velocity_stream)
    ):
        return NO_DRIFT

    hr = np.asarray(hr_stream, dtype=np.float64)
    velocity = np.asarray(velocity_stream, dtype=np.float64)
    valid = (hr > DRIFT_MIN_HR) & (velocity > DRIFT_MIN_VELOCITY)
    efficiency = velocity[valid] / hr[valid]
    if len(efficiency) < DRIFT_MIN_VALID_SAMPLES:
        return NO_DRIFT

    mid = len(efficiency) // 2
    ef_start = float(np.mean(efficiency[:mid]))
    ef_end = float(np.mean(efficiency[mid:]))
    if ef_start == 0:
        return NO_DRIFT

    drop_pct = (ef_start - ef_end) / ef_start * 100.0
    if drop_pct < DRIFT_MILD_PCT:
        return DriftResult(
            detected=False,
            severity=DriftSeverity.NONE,
            ef_start=ef_start,
            ef_end=ef_end,
            drop_pct=drop_pct,
        )

    severity, label = _classify(drop_pct)
    return DriftResult(
        detected=True,
        severity=severity,
        ef_start=ef_start,
        ef_end=ef_end,
        drop_pct=drop_pct,
        label=label,
    )
