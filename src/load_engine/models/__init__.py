"""Data models for the load engine."""

from load_engine.models.activity import ActivityLoad, ActivityStreams, ActivitySummary
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.enums import (
    DriftSeverity,
    Gender,
    IntensityClass,
    LoadModel,
    ProjectionStatus,
    ReadinessTrend,
    RiskLevel,
    ZoneModelType,
    ZoneType,
)
from load_engine.models.load_profile import (
    DailyLoadProfile,
    TrainingSnapshot,
    WeeklyLoadProfile,
)
from load_engine.models.readiness import DriftResult, ReadinessScore
from load_engine.models.zone_model import HrZone, ZoneModelResult

__all__ = [
    "ActivityLoad",
    "ActivityStreams",
    "ActivitySummary",
    "AthleteProfile",
    "AthleteThresholds",
    "DailyLoadProfile",
    "DriftResult",
    "DriftSeverity",
    "Gender",
    "HrZone",
    "IntensityClass",
    "LoadModel",
    "ProjectionStatus",
    "ReadinessScore",
    "ReadinessTrend",
    "RiskLevel",
    "TrainingSnapshot",
    "WeeklyLoadProfile",
    "ZoneModelResult",
    "ZoneModelType",
    "ZoneType",
]
