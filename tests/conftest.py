"""Shared test fixtures: athletes, activities, an in-memory store, a fake activity source."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

import pytest

from load_engine.exceptions import ActivitySourceError
from load_engine.models.activity import ActivityStreams, ActivitySummary
from load_engine.models.athlete import AthleteProfile
from load_engine.persistence import InMemoryLoadStore
from load_engine.source import ActivitySource

ATHLETE_ID = "athlete-1"


class FakeActivitySource(ActivitySource):
    """Serves activities and streams from dicts; records every stream fetch."""

    def __init__(self) -> None:
        self.activities: dict[str, ActivitySummary] = {}
        self.streams: dict[str, ActivityStreams] = {}
        self.failing: set[str] = set()
        self.stream_calls: list[str] = []

    def add(self, activity: ActivitySummary, streams: ActivityStreams | None = None) -> None:
        self.activities[activity.activity_id] = activity
        self.streams[activity.activity_id] = streams or ActivityStreams()

    def fetch_activity(self, athlete_id: str, activity_id: str) -> ActivitySummary:
        return self.activities[activity_id]

    def fetch_streams(self, athlete_id: str, activity_id: str) -> ActivityStreams:
        self.stream_calls.append(activity_id)
        if activity_id in self.failing:
            raise ActivitySourceError(f"streams unavailable for {activity_id}")
        return self.streams[activity_id]

    def list_activities(
        self, athlete_id: str, start: date, end: date
    ) -> list[ActivitySummary]:
        found = [
            a
            for a in self.activities.values()
            if a.athlete_id == athlete_id and start <= a.local_date <= end
        ]
        return sorted(found, key=lambda a: a.local_date)


@pytest.fixture
def store() -> InMemoryLoadStore:
    return InMemoryLoadStore()


@pytest.fixture
def source() -> FakeActivitySource:
    return FakeActivitySource()


@pytest.fixture
def lthr_athlete() -> AthleteProfile:
    """Male runner with LTHR 170 (zone tops 144/151/159/168, est. max 189)."""
    return AthleteProfile(athlete_id=ATHLETE_ID, lthr=170, resting_hr=50)


@pytest.fixture
def make_activity() -> Callable[..., ActivitySummary]:
    """Factory for ActivitySummary with sensible running defaults."""

    def _make(
        activity_id: str = "a1",
        day: date = date(2026, 3, 1),
        type: str = "Run",
        moving_time: float = 3600.0,
        distance: float = 12_000.0,
        average_speed: float = 1000.0 / 300.0,  # 5:00/km
        average_heartrate: float | None = 150.0,
        athlete_id: str = ATHLETE_ID,
    ) -> ActivitySummary:
        return ActivitySummary(
            activity_id=activity_id,
            athlete_id=athlete_id,
            type=type,
            start_date_local=datetime(day.year, day.month, day.day, 7, 30),
            moving_time=moving_time,
            distance=distance,
            average_speed=average_speed,
            average_heartrate=average_heartrate,
        )

    return _make


@pytest.fixture
def steady_streams() -> ActivityStreams:
    """One hour at 140 bpm, 1 Hz, no time stream."""
    return ActivityStreams(heartrate=tuple([140.0] * 3600))
