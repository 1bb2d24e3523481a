"""Fixtures with realistic Garmin API response dicts for testing."""

from __future__ import annotations

import pytest


@pytest.fixture
def garmin_activity_summary() -> dict:
    """Realistic get_activity() response (summaryDTO layout)."""
    return {
        "activityId": 18234567890,
        "activityName": "Morning Run",
        "activityTypeDTO": {"typeId": 1, "typeKey": "running"},
        "summaryDTO": {
            "startTimeLocal": "2026-03-01T07:30:12.0",
            "startTimeGMT": "2026-03-01T06:30:12.0",
            "distance": 12034.5,
            "duration": 3712.4,
            "movingDuration": 3650.0,
            "averageSpeed": 3.297,
            "averageHR": 148.0,
            "maxHR": 171.0,
        },
    }


@pytest.fixture
def garmin_activity_list() -> list[dict]:
    """Realistic get_activities_by_date() entries (flat layout)."""
    return [
        {
            "activityId": 18234567999,
            "activityType": {"typeKey": "road_biking"},
            "startTimeLocal": "2026-03-03 17:05:00",
            "distance": 40250.0,
            "duration": 5400.0,
            "movingDuration": 5280.0,
            "averageSpeed": 7.62,
            "averageHR": 139.0,
        },
        {
            "activityId": 18234567890,
            "activityType": {"typeKey": "running"},
            "startTimeLocal": "2026-03-01 07:30:12",
            "distance": 12034.5,
            "duration": 3712.4,
            "averageSpeed": 3.297,
            "averageHR": None,
        },
    ]


@pytest.fixture
def garmin_activity_details() -> dict:
    """Realistic get_activity_details() response with a gap in the HR stream."""
    return {
        "activityId": 18234567890,
        "metricDescriptors": [
            {"metricsIndex": 0, "key": "directHeartRate", "unit": {"key": "bpm"}},
            {"metricsIndex": 1, "key": "sumElapsedDuration", "unit": {"key": "second"}},
            {"metricsIndex": 2, "key": "directSpeed", "unit": {"key": "mps"}},
        ],
        "activityDetailMetrics": [
            {"metrics": [120.0, 0.0, 2.9]},
            {"metrics": [None, 1.0, 3.0]},
            {"metrics": [125.0, 2.0, 3.1]},
            {"metrics": [131.0, 3.0, 3.2]},
        ],
    }


@pytest.fixture
def garmin_profile() -> dict:
    """Realistic pull_profile() result."""
    return {
        "user_settings": {
            "id": 98765,
            "userData": {
                "gender": "FEMALE",
                "birthDate": "1988-04-12",
                "weight": 58000.0,
                "lactateThresholdHeartRate": 165,
            },
        },
        "lactate_threshold": {
            "speed_and_heart_rate": {"heartRate": 168, "speed": 3.6},
            "power": None,
        },
    }
