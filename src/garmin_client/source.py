"""Garmin-backed ActivitySource for the load engine.

One client holds one Garmin account, so each athlete gets their own
GarminActivitySource.
"""

from __future__ import annotations

import logging
from datetime import date

from load_engine.exceptions import ActivitySourceError
from load_engine.models.activity import ActivityStreams, ActivitySummary
from load_engine.models.athlete import AthleteProfile
from load_engine.source import ActivitySource

from garmin_client.client import GarminClient
from garmin_client.streams_mapper import (
    map_activity_list_entry,
    map_activity_streams,
    map_activity_summary,
    map_athlete_profile,
)

logger = logging.getLogger(__name__)


class GarminActivitySource(ActivitySource):
    def __init__(self, client: GarminClient) -> None:
        self._client = client

    def fetch_activity(self, athlete_id: str, activity_id: str) -> ActivitySummary:
        return map_activity_summary(self._client.get_activity(activity_id), athlete_id)

    def fetch_streams(self, athlete_id: str, activity_id: str) -> ActivityStreams:
        return map_activity_streams(self._client.get_activity_details(activity_id))

    def list_activities(
        self, athlete_id: str, start: date, end: date
    ) -> list[ActivitySummary]:
        raw = self._client.get_activities_by_date(start, end)
        activities = []
        for entry in raw:
            try:
                activities.append(map_activity_list_entry(entry, athlete_id))
            except ActivitySourceError as exc:
                logger.warning("Skipping activity for %s: %s", athlete_id, exc)
        return sorted(activities, key=lambda a: a.local_date)

    def fetch_athlete_profile(
        self, athlete_id: str, base: AthleteProfile | None = None
    ) -> AthleteProfile:
        return map_athlete_profile(self._client.pull_profile(), athlete_id, base=base)
