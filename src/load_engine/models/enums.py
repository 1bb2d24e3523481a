"""Enumerations and physical constants for the load engine.

All thresholds and constants cite their published research source where
one exists. Values that are product heuristics say so.
"""

from enum import Enum, IntEnum


class ZoneType(IntEnum):
    """Heart rate zones (5-zone model)."""

    ZONE_1 = 1
    ZONE_2 = 2
    ZONE_3 = 3
    ZONE_4 = 4
    ZONE_5 = 5


class ZoneModelType(str, Enum):
    """Strategy that produced an athlete's HR zone model."""

    CUSTOM = "CUSTOM"
    LTHR_FRIEL = "LTHR_FRIEL"
    HRMAX_AGE = "HRMAX_AGE"
    STATIC = "STATIC"


class LoadModel(str, Enum):
    """Interchangeable per-activity load models.

    The value is the prefix of the persisted ``formula_version`` stamp.
    """

    EDWARDS = "edwards"  # Zonal / discretized
    FORMA = "forma"  # Continuous exponential
    ESTIMATED = "estimated"  # Duration x intensity, no HR stream


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class RiskLevel(str, Enum):
    UNDERREACHING = "underreaching"
    OPTIMAL = "optimal"
    OVERREACHING = "overreaching"


class ProjectionStatus(str, Enum):
    BUILDING = "building"
    PRIME = "prime"
    NEEDS_TAPERING = "needs_tapering"
    UNKNOWN = "unknown"


class ReadinessTrend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    STABLE = "stable"


class DriftSeverity(str, Enum):
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class IntensityClass(str, Enum):
    """Session intensity bands derived from the intensity factor."""

    RECOVERY = "Recovery"
    ENDURANCE = "Endurance"
    TEMPO = "Tempo"
    THRESHOLD = "Threshold"
    VO2MAX = "VO2max"
    ANAEROBIC = "Anaerobic"


# ---------------------------------------------------------------------------
# Formula version stamps
# ---------------------------------------------------------------------------
# Bump whenever a model constant or formula changes. Stored rows are never
# recomputed retroactively unless a full resync is requested.
FORMULA_VERSION = "1.0.0"
SMOOTHING_VERSION = "1.0.0"
WEEKLY_METRICS_VERSION = "1.0.0"
DAILY_FORMULA_TAG = f"ewma@{SMOOTHING_VERSION}"
WEEKLY_FORMULA_TAG = f"foster@{WEEKLY_METRICS_VERSION}"

# ---------------------------------------------------------------------------
# Zone resolution: Friel (2009), The Triathlete's Training Bible
# ---------------------------------------------------------------------------
# Upper bounds of zones 1-4 as fraction of LTHR (floored to whole bpm)
LTHR_ZONE_UPPER_PCT = (0.85, 0.89, 0.94, 0.99)
LTHR_TO_MAX_HR_RATIO = 0.9  # Conservative max HR estimate from LTHR

# Age-predicted max HR, Fox et al. (1971): HRmax = 220 - age
AGE_HRMAX_BASE = 220
HRMAX_ZONE_UPPER_PCT = (0.60, 0.70, 0.80, 0.90)

# Static fallback anchored at HRmax 190 (product default)
STATIC_MAX_HR = 190
STATIC_ZONE_UPPER_BPM = (120, 140, 160, 180)

# Open-ended upper bound of zone 5
ZONE_CEILING_BPM = 250

# ---------------------------------------------------------------------------
# Load models
# ---------------------------------------------------------------------------
# Zonal weights per zone (product-tuned Edwards variant)
ZONAL_TRIMP_WEIGHTS = {
    ZoneType.ZONE_1: 1.0,
    ZoneType.ZONE_2: 1.1,
    ZoneType.ZONE_3: 1.2,
    ZoneType.ZONE_4: 1.3,
    ZoneType.ZONE_5: 1.5,
}

# Classic Edwards (1993) integer zone multipliers
EDWARDS_MULTIPLIERS = (1, 2, 3, 4, 5)

# Banister (1991) exponential TRIMP
BANISTER_COEFFICIENT = 0.64
BANISTER_EXPONENT_MALE = 1.92
BANISTER_EXPONENT_FEMALE = 1.67

# Stream sampling: gaps longer than this are treated as pauses
MAX_SAMPLE_GAP_S = 30

# Defaults when athlete settings are unset
DEFAULT_RESTING_HR = 55
DEFAULT_THRESHOLD_PACE_S_PER_KM = 270  # 4:30/km
DEFAULT_THRESHOLD_POWER_W = 250

# Intensity factor band upper bounds: Coggan & Allen (2010)
INTENSITY_CLASS_UPPER_IF = (
    (0.75, IntensityClass.RECOVERY),
    (0.85, IntensityClass.ENDURANCE),
    (0.95, IntensityClass.TEMPO),
    (1.05, IntensityClass.THRESHOLD),
    (1.20, IntensityClass.VO2MAX),
)

# ---------------------------------------------------------------------------
# Recurrence: Banister impulse-response, Coggan PMC time constants
# ---------------------------------------------------------------------------
CTL_TIME_CONSTANT_DAYS = 42
ATL_TIME_CONSTANT_DAYS = 7

# Chain sync convergence (empirical, not derived)
CONVERGENCE_EPSILON = 0.01
CONVERGENCE_WINDOW_DAYS = 14

# Full-history recompute window (calendar months)
RECOMPUTE_HISTORY_MONTHS = 6

# ---------------------------------------------------------------------------
# Weekly variability: Foster (1998)
# ---------------------------------------------------------------------------
MONOTONY_CAP = 2.0  # Returned when every day carries the same nonzero load
DAYS_PER_WEEK = 7

# ---------------------------------------------------------------------------
# ACWR bands: Gabbett (2016), Br J Sports Med 50(5):273-280
# ---------------------------------------------------------------------------
ACWR_OPTIMAL_LOW = 0.8
ACWR_OPTIMAL_HIGH = 1.3

# ---------------------------------------------------------------------------
# Event readiness (product heuristics)
# ---------------------------------------------------------------------------
TARGET_CTL_PER_KM = 1.5
TARGET_LONG_RUN_FRACTION = 0.8
SPECIFICITY_WINDOW_DAYS = 30
CONSISTENCY_WEEKS = 4
CONSISTENCY_MIN_WEEKLY_S = 10_800  # 3 hours
READINESS_WEIGHT_ACCUMULATION = 0.4
READINESS_WEIGHT_SPECIFICITY = 0.4
READINESS_WEIGHT_CONSISTENCY = 0.2
TREND_DELTA_THRESHOLD = 3

# Taper, Bosquet et al. (2007): optimal taper lasts 8-14 days
TAPER_WINDOW_DAYS = 14
BUILDING_MIN_TSB = -20
TAPER_ATL_FRACTION = 0.4
PRIME_TSB_LOW = 5
PRIME_TSB_HIGH = 15

# ---------------------------------------------------------------------------
# Cardiac drift: aerobic decoupling (Friel, Pa:HR)
# ---------------------------------------------------------------------------
DRIFT_MIN_SAMPLES = 60
DRIFT_MIN_VALID_SAMPLES = 40
DRIFT_MIN_HR = 40
DRIFT_MIN_VELOCITY = 0.5  # m/s
DRIFT_MILD_PCT = 2.0
DRIFT_MODERATE_PCT = 5.0
DRIFT_SEVERE_PCT = 10.0

# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------
DEFAULT_PROJECTION_DAYS = 7

# ---------------------------------------------------------------------------
# LTHR estimation from sustained efforts: Friel field test heuristics
# ---------------------------------------------------------------------------
LTHR_MIN_EFFORT_S = 1200  # 20 min
LTHR_EFFORT_FRACTIONS = (
    (30 * 60, 0.95),  # 20-30 min
    (60 * 60, 0.98),  # 30-60 min
)
LTHR_LONG_EFFORT_FRACTION = 1.0  # > 60 min
LTHR_ACTIVITY_TYPES = frozenset({"Run", "Ride"})
