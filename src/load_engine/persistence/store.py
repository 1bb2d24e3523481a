"""Abstract store boundary for load records.

Implementations provide upsert-by-key for activity loads (activity id),
daily profiles (athlete + date) and weekly profiles (athlete + week start),
plus date-range reads. Failures are raised as ``PersistenceError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from load_engine.models.activity import ActivityLoad
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.load_profile import DailyLoadProfile, WeeklyLoadProfile


class LoadStore(ABC):
    """Persistence boundary used by the sync service."""

    # -- Athlete settings -------------------------------------------------

    @abstractmethod
    def get_athlete_profile(self, athlete_id: str) -> AthleteProfile:
        """Return the athlete profile, or a default profile when unset."""

    @abstractmethod
    def save_athlete_profile(self, profile: AthleteProfile) -> None: ...

    @abstractmethod
    def get_thresholds(self, athlete_id: str) -> AthleteThresholds:
        """Return thresholds, or the documented defaults when unset."""

    @abstractmethod
    def save_thresholds(self, athlete_id: str, thresholds: AthleteThresholds) -> None: ...

    # -- Activity loads ---------------------------------------------------

    @abstractmethod
    def upsert_activity_load(self, load: ActivityLoad) -> None: ...

    @abstractmethod
    def get_activity_load(self, activity_id: str) -> ActivityLoad | None: ...

    @abstractmethod
    def list_activity_loads(
        self, athlete_id: str, start: date, end: date | None = None
    ) -> list[ActivityLoad]:
        """Activity loads dated within [start, end], oldest first."""

    # -- Daily profiles ---------------------------------------------------

    @abstractmethod
    def upsert_daily_profile(self, profile: DailyLoadProfile) -> None: ...

    @abstractmethod
    def get_profile_before(self, athlete_id: str, day: date) -> DailyLoadProfile | None:
        """Most recent daily profile dated strictly before *day*."""

    @abstractmethod
    def list_daily_profiles(
        self, athlete_id: str, start: date | None = None, end: date | None = None
    ) -> list[DailyLoadProfile]:
        """Daily profiles within the optional [start, end] range, oldest first."""

    # -- Weekly profiles --------------------------------------------------

    @abstractmethod
    def upsert_weekly_profile(self, profile: WeeklyLoadProfile) -> None: ...

    @abstractmethod
    def list_weekly_profiles(self, athlete_id: str) -> list[WeeklyLoadProfile]: ...
