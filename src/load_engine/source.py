"""Activity source boundary: the collaborator that delivers raw workouts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from load_engine.models.activity import ActivityStreams, ActivitySummary


class ActivitySource(ABC):
    """Fetches activity metadata and per-sample streams.

    Implementations raise ``ActivitySourceError`` when the upstream is
    unreachable.
    """

    @abstractmethod
    def fetch_activity(self, athlete_id: str, activity_id: str) -> ActivitySummary: ...

    @abstractmethod
    def fetch_streams(self, athlete_id: str, activity_id: str) -> ActivityStreams:
        """Heart rate, time and velocity streams; empty HR when none was recorded."""

    @abstractmethod
    def list_activities(
        self, athlete_id: str, start: date, end: date
    ) -> list[ActivitySummary]:
        """Activities with a local start date in [start, end], oldest first."""
