"""Training snapshot: a UI-independent payload of the athlete's current load state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from load_engine.models.load_profile import (
    DailyLoadProfile,
    TrainingSnapshot,
    WeeklyLoadProfile,
)


def generate_training_snapshot(
    current_profile: DailyLoadProfile,
    recent_week: WeeklyLoadProfile | None,
    next_workouts: Iterable[dict[str, Any]] = (),
    generated_at: datetime | None = None,
) -> TrainingSnapshot:
    """Assemble the snapshot consumed by coaching-text and UI collaborators.

    Values are passed through untouched; consumers must not alter them.
    """
    return TrainingSnapshot(
        current_profile=current_profile,
        recent_week=recent_week,
        next_workouts=tuple(next_workouts),
        generated_at=generated_at or datetime.now(),
    )
