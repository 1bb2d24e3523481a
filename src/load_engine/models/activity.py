"""Activity inputs (from the activity source) and the per-activity load record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from load_engine.exceptions import InvalidInputError
from load_engine.models.enums import ZoneModelType
from load_engine.models.zone_model import HrZone


@dataclass(frozen=True)
class ActivityStreams:
    """Raw per-sample streams for one workout.

    ``time`` holds elapsed seconds per sample and ``velocity`` m/s. Either
    may be absent; ``heartrate`` is empty when no HR strap was worn.
    """

    heartrate: tuple[float, ...] = field(default_factory=tuple)
    time: tuple[float, ...] | None = None
    velocity: tuple[float, ...] | None = None

    @property
    def has_heartrate(self) -> bool:
        return len(self.heartrate) > 0


@dataclass(frozen=True)
class ActivitySummary:
    """Activity metadata needed by the engine.

    ``type`` uses Strava-style names ("Run", "Ride", ...).
    """

    activity_id: str
    athlete_id: str
    type: str
    start_date_local: date | datetime
    moving_time: float = 0.0  # seconds
    distance: float = 0.0  # meters
    average_speed: float = 0.0  # m/s
    average_heartrate: float | None = None

    @property
    def local_date(self) -> date:
        if isinstance(self.start_date_local, datetime):
            return self.start_date_local.date()
        return self.start_date_local


@dataclass(frozen=True)
class ActivityLoad:
    """Per-activity load record, upserted by ``activity_id``.

    ``zone_snapshot`` freezes the exact zone bounds used so historical
    activities stay reproducible when the athlete's settings change.
    """

    activity_id: str
    athlete_id: str
    activity_date: date
    trimp_score: float
    hr_zones_time: tuple[float, ...]
    formula_version: str
    zone_model_type: ZoneModelType
    zone_snapshot: tuple[HrZone, ...]
    intensity_factor: float = 0.0
    aerobic_efficiency: float = 0.0
    calculated_at: datetime | None = None

    def __post_init__(self) -> None:
        if len(self.hr_zones_time) != 5:
            raise InvalidInputError(
                f"hr_zones_time must have exactly 5 elements, got {len(self.hr_zones_time)}"
            )
        if any(t < 0 for t in self.hr_zones_time):
            raise InvalidInputError("hr_zones_time durations must be non-negative")
