"""Tests for garmin_client.client: mock-based, no real network calls."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from garmin_client.client import GarminClient
from garmin_client.exceptions import GarminAPIError, GarminRateLimitError
from load_engine.exceptions import ActivitySourceError


def _http_error(status: int) -> Exception:
    exc = Exception(f"HTTP {status}")
    exc.status = status
    return exc


@pytest.fixture
def mock_garmin():
    return MagicMock()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(mock_garmin, sleeps):
    return GarminClient.from_garmin(mock_garmin, sleep=sleeps.append)


class TestActivities:
    def test_activities_by_date_uses_iso_strings(self, client, mock_garmin):
        mock_garmin.get_activities_by_date.return_value = [{"activityId": 1}]
        result = client.get_activities_by_date(date(2026, 3, 1), date(2026, 3, 7))
        assert result == [{"activityId": 1}]
        mock_garmin.get_activities_by_date.assert_called_once_with("2026-03-01", "2026-03-07")

    def test_none_becomes_empty_list(self, client, mock_garmin):
        mock_garmin.get_activities_by_date.return_value = None
        assert client.get_activities_by_date(date(2026, 3, 1), date(2026, 3, 7)) == []

    def test_details_request_full_resolution(self, client, mock_garmin):
        mock_garmin.get_activity_details.return_value = {"metricDescriptors": []}
        client.get_activity_details("42")
        mock_garmin.get_activity_details.assert_called_once_with("42", maxchart=10_000)

    def test_activity_summary(self, client, mock_garmin):
        mock_garmin.get_activity.return_value = {"activityId": 42}
        assert client.get_activity("42") == {"activityId": 42}


class TestRetries:
    def test_retries_on_429(self, client, mock_garmin, sleeps):
        mock_garmin.get_activity.side_effect = [_http_error(429), {"activityId": 42}]
        assert client.get_activity("42") == {"activityId": 42}
        assert sleeps == [2]

    def test_gives_up_after_retries(self, client, mock_garmin, sleeps):
        mock_garmin.get_activity.side_effect = _http_error(429)
        with pytest.raises(GarminRateLimitError):
            client.get_activity("42")
        assert sleeps == [2, 4, 8]

    def test_other_errors_not_retried(self, client, mock_garmin, sleeps):
        mock_garmin.get_activity.side_effect = _http_error(500)
        with pytest.raises(GarminAPIError) as excinfo:
            client.get_activity("42")
        assert excinfo.value.status_code == 500
        assert sleeps == []

    def test_errors_are_activity_source_errors(self, client, mock_garmin):
        mock_garmin.get_activity.side_effect = Exception("boom")
        with pytest.raises(ActivitySourceError):
            client.get_activity("42")


class TestPullProfile:
    def test_both_endpoints(self, client, mock_garmin):
        mock_garmin.get_userprofile_settings.return_value = {"userData": {}}
        mock_garmin.get_lactate_threshold.return_value = {"speed_and_heart_rate": {}}
        result = client.pull_profile()
        assert set(result) == {"user_settings", "lactate_threshold"}
        mock_garmin.get_lactate_threshold.assert_called_once_with(latest=True)

    def test_partial_failure(self, client, mock_garmin):
        mock_garmin.get_userprofile_settings.return_value = {"userData": {}}
        mock_garmin.get_lactate_threshold.side_effect = _http_error(404)
        result = client.pull_profile()
        assert result["user_settings"] == {"userData": {}}
        assert result["lactate_threshold"] is None
