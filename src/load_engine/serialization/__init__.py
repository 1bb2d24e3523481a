"""Serialization module: JSON-compatible rows for stores and consumers."""

from load_engine.serialization.rows import (
    activity_load_from_row,
    activity_load_to_row,
    athlete_profile_from_row,
    athlete_profile_to_row,
    daily_profile_from_row,
    daily_profile_to_row,
    snapshot_to_dict,
    thresholds_from_row,
    thresholds_to_row,
    weekly_profile_from_row,
    weekly_profile_to_row,
)

__all__ = [
    "activity_load_from_row",
    "activity_load_to_row",
    "athlete_profile_from_row",
    "athlete_profile_to_row",
    "daily_profile_from_row",
    "daily_profile_to_row",
    "snapshot_to_dict",
    "thresholds_from_row",
    "thresholds_to_row",
    "weekly_profile_from_row",
    "weekly_profile_to_row",
]
