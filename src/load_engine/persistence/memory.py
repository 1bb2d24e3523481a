"""Dict-backed LoadStore, used in tests and as the base of the JSON store."""

from __future__ import annotations

from datetime import date

from load_engine.models.activity import ActivityLoad
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.load_profile import DailyLoadProfile, WeeklyLoadProfile
from load_engine.persistence.store import LoadStore


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


class InMemoryLoadStore(LoadStore):
    """Holds every record in process memory, keyed like the persisted tables."""

    def __init__(self) -> None:
        self.profiles: dict[str, AthleteProfile] = {}
        self.thresholds: dict[str, AthleteThresholds] = {}
        self.activity_loads: dict[str, ActivityLoad] = {}
        self.daily: dict[tuple[str, date], DailyLoadProfile] = {}
        self.weekly: dict[tuple[str, date], WeeklyLoadProfile] = {}

    def get_athlete_profile(self, athlete_id: str) -> AthleteProfile:
        return self.profiles.get(athlete_id) or AthleteProfile(athlete_id=athlete_id)

    def save_athlete_profile(self, profile: AthleteProfile) -> None:
        self.profiles[profile.athlete_id] = profile

    def get_thresholds(self, athlete_id: str) -> AthleteThresholds:
        return self.thresholds.get(athlete_id) or AthleteThresholds()

    def save_thresholds(self, athlete_id: str, thresholds: AthleteThresholds) -> None:
        self.thresholds[athlete_id] = thresholds

    def upsert_activity_load(self, load: ActivityLoad) -> None:
        self.activity_loads[load.activity_id] = load

    def get_activity_load(self, activity_id: str) -> ActivityLoad | None:
        return self.activity_loads.get(activity_id)

    def list_activity_loads(
        self, athlete_id: str, start: date, end: date | None = None
    ) -> list[ActivityLoad]:
        loads = [
            load
            for load in self.activity_loads.values()
            if load.athlete_id == athlete_id and _in_range(load.activity_date, start, end)
        ]
        return sorted(loads, key=lambda load: load.activity_date)

    def upsert_daily_profile(self, profile: DailyLoadProfile) -> None:
        self.daily[(profile.athlete_id, profile.date)] = profile

    def get_profile_before(self, athlete_id: str, day: date) -> DailyLoadProfile | None:
        earlier = [
            p for (aid, d), p in self.daily.items() if aid == athlete_id and d < day
        ]
        return max(earlier, key=lambda p: p.date, default=None)

    def list_daily_profiles(
        self, athlete_id: str, start: date | None = None, end: date | None = None
    ) -> list[DailyLoadProfile]:
        rows = [
            p
            for (aid, d), p in self.daily.items()
            if aid == athlete_id and _in_range(d, start, end)
        ]
        return sorted(rows, key=lambda p: p.date)

    def upsert_weekly_profile(self, profile: WeeklyLoadProfile) -> None:
        self.weekly[(profile.athlete_id, profile.week_start_date)] = profile

    def list_weekly_profiles(self, athlete_id: str) -> list[WeeklyLoadProfile]:
        rows = [p for (aid, _), p in self.weekly.items() if aid == athlete_id]
        return sorted(rows, key=lambda p: p.week_start_date)
