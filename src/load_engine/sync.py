"""LoadSyncService: computes activity loads and propagates the daily load chain.

The chain sync walks calendar days from a start date to today, applying
the CTL/ATL recurrence and upserting one DailyLoadProfile per day. Once
the recomputed values have matched the stored ones for
CONVERGENCE_WINDOW consecutive days after the last activity, the
remaining days are presumed unchanged and are not rewritten.

Writes are at-least-once, not atomic: a store failure aborts the walk and
propagates, leaving rows written so far in place.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable

import pandas as pd

from load_engine.activity_load import compute_activity_load
from load_engine.exceptions import LoadEngineError
from load_engine.math.smoothing import LoadState, advance_day, iter_calendar_days
from load_engine.math.threshold import estimate_lthr
from load_engine.math.weekly import build_weekly_profiles
from load_engine.models.activity import ActivityLoad, ActivitySummary
from load_engine.models.athlete import AthleteProfile
from load_engine.models.enums import (
    CONVERGENCE_EPSILON,
    CONVERGENCE_WINDOW_DAYS,
    DAILY_FORMULA_TAG,
    RECOMPUTE_HISTORY_MONTHS,
    LoadModel,
)
from load_engine.models.load_profile import DailyLoadProfile, WeeklyLoadProfile
from load_engine.persistence.store import LoadStore
from load_engine.source import ActivitySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainSyncConfig:
    """Early-exit tuning for the chain sync."""

    epsilon: float = CONVERGENCE_EPSILON
    convergence_window: int = CONVERGENCE_WINDOW_DAYS


@dataclass(frozen=True)
class ChainSyncResult:
    """Outcome of one chain sync walk."""

    start_date: date
    end_date: date
    days_written: int
    last_written: date | None
    converged_at: date | None

    @property
    def converged(self) -> bool:
        return self.converged_at is not None


@dataclass(frozen=True)
class BackfillResult:
    synced: tuple[str, ...]
    failed: tuple[str, ...]
    chain: ChainSyncResult | None


def aggregate_daily_loads(loads: Iterable[ActivityLoad]) -> dict[date, float]:
    """Sum activity loads per local calendar date."""
    totals: dict[date, float] = {}
    for load in loads:
        totals[load.activity_date] = totals.get(load.activity_date, 0.0) + load.trimp_score
    return totals


def _months_before(day: date, months: int) -> date:
    return (pd.Timestamp(day) - pd.DateOffset(months=months)).date()


class LoadSyncService:
    """Orchestrates activity metric sync, chain sync and weekly resync.

    Usage:
        service = LoadSyncService(store, source)
        service.sync_activity_metrics("athlete-1", "12345")
        service.sync_load_chain("athlete-1", date(2026, 3, 1))
    """

    def __init__(
        self,
        store: LoadStore,
        source: ActivitySource | None = None,
        config: ChainSyncConfig | None = None,
        today: Callable[[], date] = date.today,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.source = source
        self.config = config or ChainSyncConfig()
        self._today = today
        self._clock = clock
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Chain sync
    # ------------------------------------------------------------------

    def sync_load_chain(
        self, athlete_id: str, start_date: date, resync_weekly: bool = True
    ) -> ChainSyncResult:
        """Recompute and persist daily profiles from *start_date* to today.

        Args:
            athlete_id: Athlete whose chain is recomputed.
            start_date: First day to recompute; seeded from the last stored
                profile strictly before it (zero state when none exists).
            resync_weekly: Rebuild weekly monotony/strain afterwards.
        """
        today = self._today()
        seed = self.store.get_profile_before(athlete_id, start_date)
        state = LoadState(ctl=seed.ctl, atl=seed.atl) if seed else LoadState()

        stored = {
            p.date: p for p in self.store.list_daily_profiles(athlete_id, start_date, today)
        }
        trimp_by_date = aggregate_daily_loads(
            self.store.list_activity_loads(athlete_id, start_date, today)
        )
        active_days = [d for d, load in trimp_by_date.items() if load != 0]
        last_activity_date = max(active_days, default=start_date)

        stable_days = 0
        days_written = 0
        last_written: date | None = None
        converged_at: date | None = None

        for day in iter_calendar_days(start_date, today):
            daily_trimp = trimp_by_date.get(day, 0.0)
            step = advance_day(state, daily_trimp)

            previous = stored.get(day)
            delta_ctl = abs(step.ctl - previous.ctl) if previous else math.inf
            delta_atl = abs(step.atl - previous.atl) if previous else math.inf

            if (
                day > last_activity_date
                and delta_ctl < self.config.epsilon
                and delta_atl < self.config.epsilon
            ):
                stable_days += 1
                if stable_days >= self.config.convergence_window:
                    converged_at = day
                    logger.info(
                        "Chain for %s converged after %d stable days at %s",
                        athlete_id,
                        stable_days,
                        day.isoformat(),
                    )
                    break
            else:
                stable_days = 0

            profile = DailyLoadProfile(
                athlete_id=athlete_id,
                date=day,
                daily_trimp=daily_trimp,
                ctl=step.ctl,
                atl=step.atl,
                tsb=step.tsb,
                acwr=step.acwr,
                formula_version=DAILY_FORMULA_TAG,
                calculated_at=self._clock(),
            )
            try:
                self.store.upsert_daily_profile(profile)
            except Exception:
                logger.error(
                    "Failed to save daily profile for %s on %s; chain aborted",
                    athlete_id,
                    day.isoformat(),
                )
                raise
            days_written += 1
            last_written = day
            state = step.state

        result = ChainSyncResult(
            start_date=start_date,
            end_date=today,
            days_written=days_written,
            last_written=last_written,
            converged_at=converged_at,
        )
        logger.info(
            "Chain sync for %s from %s wrote %d days", athlete_id, start_date, days_written
        )

        if resync_weekly:
            self.sync_weekly_metrics(athlete_id)
        return result

    # ------------------------------------------------------------------
    # Weekly resync
    # ------------------------------------------------------------------

    def sync_weekly_metrics(self, athlete_id: str) -> list[WeeklyLoadProfile]:
        """Rebuild monotony/strain for every week of the athlete's history."""
        daily = self.store.list_daily_profiles(athlete_id)
        weekly = build_weekly_profiles(athlete_id, daily, calculated_at=self._clock())
        for profile in weekly:
            self.store.upsert_weekly_profile(profile)
        logger.debug("Resynced %d weeks for %s", len(weekly), athlete_id)
        return weekly

    # ------------------------------------------------------------------
    # Activity metrics
    # ------------------------------------------------------------------

    def _require_source(self) -> ActivitySource:
        if self.source is None:
            raise LoadEngineError("LoadSyncService has no activity source configured")
        return self.source

    def sync_activity_metrics(
        self,
        athlete_id: str,
        activity_id: str,
        model: LoadModel = LoadModel.EDWARDS,
        skip_chain_sync: bool = False,
        activity: ActivitySummary | None = None,
    ) -> ActivityLoad:
        """Fetch one activity, compute and store its load, then propagate.

        Args:
            athlete_id: Owner of the activity.
            activity_id: Source-side activity identifier.
            model: Load model to use when HR data exists.
            skip_chain_sync: Only store the activity load (bulk backfill).
            activity: Pre-fetched summary, skips the metadata fetch.
        """
        source = self._require_source()
        streams = source.fetch_streams(athlete_id, activity_id)
        if activity is None:
            activity = source.fetch_activity(athlete_id, activity_id)
        if not streams.has_heartrate:
            logger.warning(
                "No heart rate data for activity %s; estimating load from duration",
                activity_id,
            )

        profile = self.store.get_athlete_profile(athlete_id)
        thresholds = self.store.get_thresholds(athlete_id)
        load = compute_activity_load(
            activity, streams, profile, thresholds, model=model, calculated_at=self._clock()
        )
        self.store.upsert_activity_load(load)
        self._suggest_lthr(activity, profile)

        if not skip_chain_sync:
            self.sync_load_chain(athlete_id, activity.local_date)
        return load

    def _suggest_lthr(self, activity: ActivitySummary, profile: AthleteProfile) -> None:
        suggested = estimate_lthr(
            activity.type, activity.average_heartrate, activity.moving_time, profile.lthr
        )
        if suggested is None or suggested == profile.suggested_lthr:
            return
        logger.info("Possible new LTHR for %s: %d bpm", profile.athlete_id, suggested)
        self.store.save_athlete_profile(dataclasses.replace(profile, suggested_lthr=suggested))

    # ------------------------------------------------------------------
    # Full history
    # ------------------------------------------------------------------

    def recompute_full_history(
        self,
        athlete_id: str,
        months: int = RECOMPUTE_HISTORY_MONTHS,
        model: LoadModel = LoadModel.FORMA,
        pause_s: float = 0.25,
    ) -> BackfillResult:
        """Recompute every activity of the last *months* and the whole chain.

        Per-activity failures are logged and skipped; the final chain sync
        starts at the earliest activity and propagates its errors.
        """
        source = self._require_source()
        today = self._today()
        since = _months_before(today, months)
        activities = source.list_activities(athlete_id, since, today)
        if not activities:
            logger.info("No activities to recompute for %s since %s", athlete_id, since)
            return BackfillResult(synced=(), failed=(), chain=None)

        synced: list[str] = []
        failed: list[str] = []
        for activity in activities:
            try:
                self.sync_activity_metrics(
                    athlete_id,
                    activity.activity_id,
                    model=model,
                    skip_chain_sync=True,
                    activity=activity,
                )
                synced.append(activity.activity_id)
            except LoadEngineError as exc:
                logger.error("Error backfilling activity %s: %s", activity.activity_id, exc)
                failed.append(activity.activity_id)
            if pause_s > 0:
                self._sleep(pause_s)

        first_date = min(a.local_date for a in activities)
        chain = self.sync_load_chain(athlete_id, first_date)
        return BackfillResult(synced=tuple(synced), failed=tuple(failed), chain=chain)
