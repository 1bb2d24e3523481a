"""Tests for garmin_client.streams_mapper: pure dict-to-model mapping."""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from garmin_client.source import GarminActivitySource
from garmin_client.streams_mapper import (
    map_activity_list_entry,
    map_activity_streams,
    map_activity_summary,
    map_activity_type,
    map_athlete_profile,
)
from load_engine.exceptions import ActivitySourceError
from load_engine.models.athlete import AthleteProfile
from load_engine.models.enums import Gender


class TestActivityType:
    def test_known_types(self):
        assert map_activity_type("running") == "Run"
        assert map_activity_type("trail_running") == "Run"
        assert map_activity_type("road_biking") == "Ride"

    def test_unknown_type_title_cased(self):
        assert map_activity_type("strength_training") == "StrengthTraining"

    def test_missing_type(self):
        assert map_activity_type(None) == "Workout"


class TestActivitySummary:
    def test_summary_dto(self, garmin_activity_summary):
        activity = map_activity_summary(garmin_activity_summary, "athlete-1")
        assert activity.activity_id == "18234567890"
        assert activity.type == "Run"
        assert activity.start_date_local == datetime(2026, 3, 1, 7, 30, 12)
        assert activity.moving_time == 3650.0
        assert activity.average_heartrate == 148.0

    def test_list_entry(self, garmin_activity_list):
        ride = map_activity_list_entry(garmin_activity_list[0], "athlete-1")
        assert ride.type == "Ride"
        assert ride.local_date == date(2026, 3, 3)
        assert ride.moving_time == 5280.0

    def test_list_entry_falls_back_to_duration(self, garmin_activity_list):
        run = map_activity_list_entry(garmin_activity_list[1], "athlete-1")
        assert run.moving_time == 3712.4
        assert run.average_heartrate is None

    def test_missing_start_rejected(self):
        with pytest.raises(ActivitySourceError):
            map_activity_summary({"activityId": 1, "summaryDTO": {"distance": 5000.0}}, "athlete-1")

    def test_unparseable_list_start_rejected(self, garmin_activity_list):
        entry = dict(garmin_activity_list[0], startTimeLocal="not a date")
        with pytest.raises(ActivitySourceError):
            map_activity_list_entry(entry, "athlete-1")


class TestActivityStreams:
    def test_samples_without_hr_dropped(self, garmin_activity_details):
        streams = map_activity_streams(garmin_activity_details)
        assert streams.heartrate == (120.0, 125.0, 131.0)
        assert streams.time == (0.0, 2.0, 3.0)
        assert streams.velocity == (2.9, 3.1, 3.2)

    def test_incomplete_velocity_dropped(self, garmin_activity_details):
        garmin_activity_details["activityDetailMetrics"][2]["metrics"][2] = None
        streams = map_activity_streams(garmin_activity_details)
        assert streams.velocity is None
        assert streams.time is not None

    def test_no_hr_descriptor(self, garmin_activity_details):
        garmin_activity_details["metricDescriptors"] = garmin_activity_details[
            "metricDescriptors"
        ][1:]
        assert not map_activity_streams(garmin_activity_details).has_heartrate

    def test_empty_details(self):
        assert not map_activity_streams({}).has_heartrate


class TestAthleteProfile:
    def test_maps_garmin_profile(self, garmin_profile):
        profile = map_athlete_profile(garmin_profile, "athlete-1")
        assert profile.lthr == 168.0
        assert profile.gender == Gender.FEMALE
        assert profile.birth_date == "1988-04-12"

    def test_falls_back_to_user_data_lthr(self, garmin_profile):
        garmin_profile["lactate_threshold"] = None
        assert map_athlete_profile(garmin_profile, "athlete-1").lthr == 165.0

    def test_keeps_base_fields(self):
        base = AthleteProfile(athlete_id="athlete-1", lthr=160, resting_hr=48, suggested_lthr=170)
        profile = map_athlete_profile({"user_settings": None}, "athlete-1", base=base)
        assert profile == base


class TestGarminActivitySource:
    def test_list_sorted_oldest_first(self, garmin_activity_list):
        client = MagicMock()
        client.get_activities_by_date.return_value = garmin_activity_list
        activities = GarminActivitySource(client).list_activities(
            "athlete-1", date(2026, 3, 1), date(2026, 3, 7)
        )
        assert [a.activity_id for a in activities] == ["18234567890", "18234567999"]

    def test_list_skips_undated_entries(self, garmin_activity_list):
        undated = dict(garmin_activity_list[0], activityId=1, startTimeLocal=None)
        client = MagicMock()
        client.get_activities_by_date.return_value = [undated, *garmin_activity_list]
        activities = GarminActivitySource(client).list_activities(
            "athlete-1", date(2026, 3, 1), date(2026, 3, 7)
        )
        assert [a.activity_id for a in activities] == ["18234567890", "18234567999"]

    def test_fetch_streams(self, garmin_activity_details):
        client = MagicMock()
        client.get_activity_details.return_value = garmin_activity_details
        streams = GarminActivitySource(client).fetch_streams("athlete-1", "18234567890")
        assert len(streams.heartrate) == 3
        client.get_activity_details.assert_called_once_with("18234567890")
