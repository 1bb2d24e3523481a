"""Nightly scheduler: pulls recent activities and re-propagates load chains.

Usage:
    python -m scheduler.nightly --once              # single run (for cron)
    python -m scheduler.nightly --once --recompute  # full-history recompute
    python -m scheduler.nightly --daemon            # APScheduler loop

Athletes are processed one after another; a failure for one athlete is
logged and never aborts the others.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Iterable

from garmin_client import GarminActivitySource, GarminClient
from garmin_client.auth import resume_session
from load_engine.exceptions import LoadEngineError
from load_engine.models.enums import LoadModel
from load_engine.persistence import JsonFileLoadStore, LoadStore
from load_engine.source import ActivitySource
from load_engine.sync import ChainSyncResult, LoadSyncService

from scheduler.config import (
    ATHLETES_FILE,
    BACKFILL_PAUSE_S,
    GARMIN_TOKEN_DIR,
    LOAD_MODEL,
    LOAD_STORE_DIR,
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    SYNC_LOOKBACK_DAYS,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AthleteEntry:
    athlete_id: str
    token_dir: Path


def load_athletes(path: Path = ATHLETES_FILE) -> list[AthleteEntry]:
    """Read the athlete list: ``[{"athlete_id": ..., "token_dir": ...}, ...]``."""
    with open(path) as f:
        data = json.load(f)
    return [
        AthleteEntry(
            athlete_id=str(item["athlete_id"]),
            token_dir=Path(
                item.get("token_dir") or GARMIN_TOKEN_DIR / str(item["athlete_id"])
            ).expanduser(),
        )
        for item in data
    ]


def garmin_source_for(athlete: AthleteEntry) -> GarminActivitySource:
    return GarminActivitySource(GarminClient.from_garmin(resume_session(athlete.token_dir)))


def sync_recent(
    service: LoadSyncService,
    athlete_id: str,
    today: date,
    model: LoadModel,
    lookback_days: int = SYNC_LOOKBACK_DAYS,
) -> ChainSyncResult:
    """Sync the last *lookback_days* of activities, then roll the chain to today."""
    source = service.source
    if source is None:
        raise LoadEngineError("LoadSyncService has no activity source configured")
    since = today - timedelta(days=lookback_days)

    if isinstance(source, GarminActivitySource):
        profile = source.fetch_athlete_profile(
            athlete_id, base=service.store.get_athlete_profile(athlete_id)
        )
        service.store.save_athlete_profile(profile)

    activities = source.list_activities(athlete_id, since, today)
    for activity in activities:
        service.sync_activity_metrics(
            athlete_id,
            activity.activity_id,
            model=model,
            skip_chain_sync=True,
            activity=activity,
        )
    start = min((a.local_date for a in activities), default=since)
    logger.info("Synced %d activities for %s since %s", len(activities), athlete_id, since)
    return service.sync_load_chain(athlete_id, start)


def nightly_job(
    athletes: Iterable[AthleteEntry] | None = None,
    store: LoadStore | None = None,
    source_factory: Callable[[AthleteEntry], ActivitySource] = garmin_source_for,
    recompute: bool = False,
    today: date | None = None,
    model: LoadModel | str | None = None,
) -> dict[str, bool]:
    """Execute one nightly cycle. Returns athlete id -> success.

    *model* defaults to the LOAD_MODEL setting. An unknown model name is
    logged and the cycle is skipped.
    """
    logger.info("Starting nightly load sync")
    try:
        load_model = LoadModel(model or LOAD_MODEL)
    except ValueError:
        logger.error(
            "Unknown load model %r; expected one of %s",
            model or LOAD_MODEL,
            ", ".join(m.value for m in LoadModel),
        )
        return {}
    if athletes is None:
        try:
            athletes = load_athletes()
        except FileNotFoundError:
            logger.error("Athletes file not found at %s", ATHLETES_FILE)
            return {}
    store = store or JsonFileLoadStore(LOAD_STORE_DIR)
    run_date = today or date.today()

    outcome: dict[str, bool] = {}
    for athlete in athletes:
        try:
            service = LoadSyncService(
                store, source_factory(athlete), today=lambda: run_date
            )
            if recompute:
                result = service.recompute_full_history(
                    athlete.athlete_id, pause_s=BACKFILL_PAUSE_S
                )
                logger.info(
                    "Recomputed %s: %d synced, %d failed",
                    athlete.athlete_id,
                    len(result.synced),
                    len(result.failed),
                )
            else:
                sync_recent(service, athlete.athlete_id, run_date, load_model)
            outcome[athlete.athlete_id] = True
        except Exception as exc:
            logger.error("Load sync failed for %s: %s", athlete.athlete_id, exc)
            outcome[athlete.athlete_id] = False

    logger.info(
        "Nightly load sync complete: %d ok, %d failed",
        sum(outcome.values()),
        len(outcome) - sum(outcome.values()),
    )
    return outcome


def main() -> None:
    parser = argparse.ArgumentParser(description="Training load nightly sync")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    parser.add_argument(
        "--recompute", action="store_true", help="Recompute the last 6 months per athlete"
    )
    args = parser.parse_args()

    if args.once:
        nightly_job(recompute=args.recompute)
        return

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    scheduler.add_job(
        nightly_job,
        "cron",
        hour=NIGHTLY_HOUR,
        minute=NIGHTLY_MINUTE,
        id="nightly_load_sync",
        kwargs={"recompute": args.recompute},
    )
    logger.info(
        "Scheduler started: nightly load sync at %02d:%02d", NIGHTLY_HOUR, NIGHTLY_MINUTE
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
