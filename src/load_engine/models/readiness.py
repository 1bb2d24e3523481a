"""Event readiness and cardiac drift results."""

from __future__ import annotations

from dataclasses import dataclass

from load_engine.models.enums import DriftSeverity


@dataclass(frozen=True)
class ReadinessScore:
    """Component scores (0-100) and their 40/40/20 weighted total."""

    accumulation_score: float
    specificity_score: float
    consistency_score: float
    total_score: int


@dataclass(frozen=True)
class DriftResult:
    """Aerobic decoupling between the first and second half of an effort."""

    detected: bool
    severity: DriftSeverity
    ef_start: float = 0.0
    ef_end: float = 0.0
    drop_pct: float = 0.0
    label: str = "No drift detected"
