"""Performance metrics: aerobic efficiency, intensity factor, athlete rank."""

from __future__ import annotations

from dataclasses import dataclass

from load_engine.models.enums import INTENSITY_CLASS_UPPER_IF, IntensityClass


def calculate_ef(output: float, avg_hr: float) -> float:
    """Aerobic efficiency: output (m/s or W) per beat of average HR."""
    if not output or not avg_hr:
        return 0.0
    return output / avg_hr


def calculate_if(output: float, threshold: float, is_pace: bool = False) -> float:
    """Intensity factor relative to a threshold.

    For pace (s/km) lower is faster, so IF = threshold / output.
    For speed or power IF = output / threshold.
    """
    if not output or not threshold:
        return 0.0
    if is_pace:
        return threshold / output
    return output / threshold


def activity_intensity_factor(
    activity_type: str,
    average_speed: float,
    avg_hr: float,
    lthr: float | None,
    threshold_pace: float,
    threshold_power: float,
) -> float:
    """Pick the intensity factor source for an activity.

    Runs compare pace against threshold pace. Other sports use HR against
    LTHR when both exist, else speed against threshold power.
    """
    if activity_type == "Run":
        pace = 1000.0 / average_speed if average_speed > 0 else 0.0
        return calculate_if(pace, threshold_pace, is_pace=True)
    if lthr and avg_hr > 0:
        return avg_hr / lthr
    return calculate_if(average_speed, threshold_power)


def classify_intensity(intensity_factor: float) -> IntensityClass:
    for upper, intensity_class in INTENSITY_CLASS_UPPER_IF:
        if intensity_factor < upper:
            return intensity_class
    return IntensityClass.ANAEROBIC


@dataclass(frozen=True)
class AthleteRank:
    name: str
    min_ctl: float
    max_ctl: float
    description: str


ATHLETE_RANKS: tuple[AthleteRank, ...] = (
    AthleteRank("Novice", 0, 20, "Building the habit and waking up the engine."),
    AthleteRank("Active", 20, 45, "Regular athlete with an established base."),
    AthleteRank("Committed", 45, 70, "Serious training with good aerobic capacity."),
    AthleteRank("Advanced", 70, 95, "High performance, well above average."),
    AthleteRank("Elite", 95, 250, "Professional level fitness."),
)


def classify_athlete_rank(ctl: float) -> AthleteRank:
    """Rank an athlete by chronic load (first band whose ceiling exceeds CTL)."""
    for rank in ATHLETE_RANKS:
        if ctl < rank.max_ctl:
            return rank
    return ATHLETE_RANKS[-1]
