"""Garmin Connect activity source: all Garmin network I/O lives here."""

from garmin_client.client import GarminClient
from garmin_client.exceptions import (
    GarminAPIError,
    GarminAuthError,
    GarminClientError,
    GarminRateLimitError,
)
from garmin_client.source import GarminActivitySource
from garmin_client.streams_mapper import (
    map_activity_list_entry,
    map_activity_streams,
    map_activity_summary,
    map_athlete_profile,
)

__all__ = [
    "GarminActivitySource",
    "GarminClient",
    "GarminAPIError",
    "GarminAuthError",
    "GarminClientError",
    "GarminRateLimitError",
    "map_activity_list_entry",
    "map_activity_streams",
    "map_activity_summary",
    "map_athlete_profile",
]
