"""Exponentially weighted load recurrence: CTL, ATL, TSB, ACWR.

    ctl' = ctl * e^(-1/42) + load * (1 - e^(-1/42))
    atl' = atl * e^(-1/7)  + load * (1 - e^(-1/7))
    tsb  = ctl - atl          (state before today's update)
    acwr = atl' / ctl'        (state after today's update)

The recurrence runs once per calendar day in date order; days are not
independent and cannot be reordered.

References:
    - Banister et al. (1975): impulse-response fitness/fatigue model
    - Coggan: Performance Manager Chart time constants (42 / 7 days)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from load_engine.exceptions import InvalidInputError
from load_engine.models.enums import ATL_TIME_CONSTANT_DAYS, CTL_TIME_CONSTANT_DAYS


def calculate_exponential_smoothing(
    today_load: float, yesterday_smoothed: float, time_constant: float
) -> float:
    """One step of an exponential moving average with time constant in days."""
    if time_constant <= 0:
        raise InvalidInputError("time_constant must be strictly positive")
    alpha = 1.0 - math.exp(-1.0 / time_constant)
    return today_load * alpha + yesterday_smoothed * (1.0 - alpha)


def calculate_ctl(today_load: float, yesterday_ctl: float) -> float:
    return calculate_exponential_smoothing(today_load, yesterday_ctl, CTL_TIME_CONSTANT_DAYS)


def calculate_atl(today_load: float, yesterday_atl: float) -> float:
    return calculate_exponential_smoothing(today_load, yesterday_atl, ATL_TIME_CONSTANT_DAYS)


def calculate_tsb(yesterday_ctl: float, yesterday_atl: float) -> float:
    """Form for today: yesterday's fitness minus yesterday's fatigue."""
    return yesterday_ctl - yesterday_atl


def calculate_acwr(atl: float, ctl: float) -> float:
    """Acute:chronic workload ratio; 0.0 when chronic load is zero."""
    if ctl == 0:
        return 0.0
    return atl / ctl


@dataclass(frozen=True)
class LoadState:
    """Carried recurrence state as of the end of a day."""

    ctl: float = 0.0
    atl: float = 0.0


@dataclass(frozen=True)
class LoadStep:
    """Result of advancing the recurrence by one day."""

    ctl: float
    atl: float
    tsb: float
    acwr: float

    @property
    def state(self) -> LoadState:
        return LoadState(ctl=self.ctl, atl=self.atl)


def advance_day(state: LoadState, daily_load: float) -> LoadStep:
    """Apply one day of load to the carried (ctl, atl) state."""
    ctl = calculate_ctl(daily_load, state.ctl)
    atl = calculate_atl(daily_load, state.atl)
    return LoadStep(
        ctl=ctl,
        atl=atl,
        tsb=calculate_tsb(state.ctl, state.atl),
        acwr=calculate_acwr(atl, ctl),
    )


def _ewm_from_seed(loads: pd.Series, seed: float, time_constant: float) -> np.ndarray:
    """Seeded EWMA path: element 0 is the seed, element i the state after day i."""
    alpha = 1.0 - math.exp(-1.0 / time_constant)
    series = pd.concat([pd.Series([seed], dtype=np.float64), loads], ignore_index=True)
    return series.ewm(alpha=alpha, adjust=False).mean().to_numpy()


def run_recurrence(
    daily_loads: Iterable[float], seed: LoadState | None = None
) -> list[LoadStep]:
    """Apply the recurrence over consecutive daily loads (oldest first).

    Equivalent to chaining ``advance_day``, vectorised through pandas
    ``ewm(adjust=False)`` with the seed state as the first observation.
    """
    state = seed or LoadState()
    loads = pd.Series(list(daily_loads), dtype=np.float64)
    if loads.empty:
        return []

    ctl = _ewm_from_seed(loads, state.ctl, CTL_TIME_CONSTANT_DAYS)
    atl = _ewm_from_seed(loads, state.atl, ATL_TIME_CONSTANT_DAYS)
    return [
        LoadStep(
            ctl=float(ctl[i + 1]),
            atl=float(atl[i + 1]),
            tsb=calculate_tsb(float(ctl[i]), float(atl[i])),
            acwr=calculate_acwr(float(atl[i + 1]), float(ctl[i + 1])),
        )
        for i in range(len(loads))
    ]


def iter_calendar_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar date from *start* to *end* inclusive.

    ``date`` carries no time-of-day or timezone, so whole-day steps can
    never skip or repeat a day across DST transitions.
    """
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)
