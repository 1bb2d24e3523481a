"""LoadStore persisted as one JSON document per athlete.

Layout: ``<root>/<athlete_id>.json`` with keys ``profile``, ``thresholds``,
``activity_loads``, ``daily`` and ``weekly``. Every write rewrites the
affected athlete's document, so partial progress of a chain sync survives
a later failure.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any
from urllib.parse import quote

from load_engine.exceptions import PersistenceError
from load_engine.models.activity import ActivityLoad
from load_engine.models.athlete import AthleteProfile, AthleteThresholds
from load_engine.models.load_profile import DailyLoadProfile, WeeklyLoadProfile
from load_engine.persistence.memory import InMemoryLoadStore
from load_engine.serialization.rows import (
    activity_load_from_row,
    activity_load_to_row,
    athlete_profile_from_row,
    athlete_profile_to_row,
    daily_profile_from_row,
    daily_profile_to_row,
    thresholds_from_row,
    thresholds_to_row,
    weekly_profile_from_row,
    weekly_profile_to_row,
)

logger = logging.getLogger(__name__)


def _safe_filename(athlete_id: str) -> str:
    """Percent-encode the id so distinct athletes never share a file."""
    return quote(athlete_id, safe="")


class JsonFileLoadStore(InMemoryLoadStore):
    """In-memory store mirrored to JSON files under *root*."""

    def __init__(self, root: Path | str) -> None:
        super().__init__()
        self._root = Path(root).expanduser()
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            for path in sorted(self._root.glob("*.json")):
                self._load_document(path)
        except (OSError, ValueError, KeyError) as exc:
            raise PersistenceError(f"Failed to load store at {self._root}: {exc}") from exc
        logger.debug("Loaded load store from %s", self._root)

    # ------------------------------------------------------------------
    # Writes: update memory, then flush the athlete's document
    # ------------------------------------------------------------------

    def save_athlete_profile(self, profile: AthleteProfile) -> None:
        super().save_athlete_profile(profile)
        self._flush(profile.athlete_id)

    def save_thresholds(self, athlete_id: str, thresholds: AthleteThresholds) -> None:
        super().save_thresholds(athlete_id, thresholds)
        self._flush(athlete_id)

    def upsert_activity_load(self, load: ActivityLoad) -> None:
        super().upsert_activity_load(load)
        self._flush(load.athlete_id)

    def upsert_daily_profile(self, profile: DailyLoadProfile) -> None:
        super().upsert_daily_profile(profile)
        self._flush(profile.athlete_id)

    def upsert_weekly_profile(self, profile: WeeklyLoadProfile) -> None:
        super().upsert_weekly_profile(profile)
        self._flush(profile.athlete_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _path(self, athlete_id: str) -> Path:
        return self._root / f"{_safe_filename(athlete_id)}.json"

    def _document(self, athlete_id: str) -> dict[str, Any]:
        profile = self.profiles.get(athlete_id)
        thresholds = self.thresholds.get(athlete_id)
        return {
            "athlete_id": athlete_id,
            "profile": athlete_profile_to_row(profile) if profile else None,
            "thresholds": thresholds_to_row(thresholds) if thresholds else None,
            "activity_loads": [
                activity_load_to_row(load)
                for load in self.list_activity_loads(athlete_id, date.min)
            ],
            "daily": [daily_profile_to_row(p) for p in self.list_daily_profiles(athlete_id)],
            "weekly": [weekly_profile_to_row(p) for p in self.list_weekly_profiles(athlete_id)],
        }

    def _flush(self, athlete_id: str) -> None:
        path = self._path(athlete_id)
        tmp = path.with_suffix(".json.tmp")
        try:
            with open(tmp, "w") as f:
                json.dump(self._document(athlete_id), f, indent=2)
            tmp.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path}: {exc}") from exc

    def _load_document(self, path: Path) -> None:
        with open(path) as f:
            data = json.load(f)
        athlete_id = str(data["athlete_id"])
        if data.get("profile"):
            self.profiles[athlete_id] = athlete_profile_from_row(data["profile"])
        if data.get("thresholds"):
            self.thresholds[athlete_id] = thresholds_from_row(data["thresholds"])
        for row in data.get("activity_loads", []):
            load = activity_load_from_row(row)
            self.activity_loads[load.activity_id] = load
        for row in data.get("daily", []):
            profile = daily_profile_from_row(row)
            self.daily[(profile.athlete_id, profile.date)] = profile
        for row in data.get("weekly", []):
            weekly = weekly_profile_from_row(row)
            self.weekly[(weekly.athlete_id, weekly.week_start_date)] = weekly
