"""High-level Garmin Connect client facade for activity data.

All methods wrap raw garminconnect calls with error handling and retry logic.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from pathlib import Path
from typing import Any, Callable

from garminconnect import Garmin

from garmin_client.auth import DEFAULT_TOKEN_DIR, create_session
from garmin_client.exceptions import GarminAPIError, GarminRateLimitError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2
# Garmin downsamples detail metrics to at most this many points
_MAX_CHART_POINTS = 10_000


class GarminClient:
    """Facade for Garmin Connect activity, stream and profile reads."""

    def __init__(
        self,
        email: str | None = None,
        password: str | None = None,
        token_dir: Path | str = DEFAULT_TOKEN_DIR,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._garmin = create_session(
            email=email or "", password=password or "", token_dir=token_dir
        )
        self._sleep = sleep

    @classmethod
    def from_garmin(
        cls, garmin: Garmin, sleep: Callable[[float], None] = time.sleep
    ) -> "GarminClient":
        """Construct from an already-authenticated Garmin object."""
        obj = cls.__new__(cls)
        obj._garmin = garmin
        obj._sleep = sleep
        return obj

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    def get_activity(self, activity_id: str) -> dict[str, Any]:
        """Activity summary (type, local start, distance, durations, speed, HR)."""
        return self._safe_call(self._garmin.get_activity, activity_id) or {}

    def get_activity_details(self, activity_id: str) -> dict[str, Any]:
        """Per-sample metric descriptors and values for one activity."""
        return (
            self._safe_call(
                self._garmin.get_activity_details,
                activity_id,
                maxchart=_MAX_CHART_POINTS,
            )
            or {}
        )

    def get_activities_by_date(self, start: date, end: date) -> list[dict[str, Any]]:
        """Activities with a start date in [start, end] (any sport)."""
        activities = self._safe_call(
            self._garmin.get_activities_by_date, start.isoformat(), end.isoformat()
        )
        logger.debug("Fetched %d activities %s..%s", len(activities or []), start, end)
        return activities or []

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def pull_profile(self) -> dict[str, Any]:
        """User settings and latest lactate threshold.

        Individual keys are None when their endpoint fails (partial data is OK).
        """
        result: dict[str, Any] = {}
        endpoints: dict[str, tuple[Callable, dict[str, Any]]] = {
            "user_settings": (self._garmin.get_userprofile_settings, {}),
            "lactate_threshold": (self._garmin.get_lactate_threshold, {"latest": True}),
        }
        for key, (fn, kwargs) in endpoints.items():
            try:
                result[key] = self._safe_call(fn, **kwargs)
            except GarminAPIError as exc:
                logger.warning("Failed to pull %s: %s", key, exc)
                result[key] = None
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn*, retrying with exponential backoff on HTTP 429."""
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                last_exc = exc
                status = getattr(exc, "status", None) or getattr(exc, "status_code", None)
                if status != 429:
                    raise GarminAPIError(str(exc), status_code=status) from exc
                wait = _BASE_BACKOFF_S * (2**attempt)
                logger.warning(
                    "Rate limited (attempt %d/%d), retrying in %ds",
                    attempt + 1,
                    _MAX_RETRIES,
                    wait,
                )
                self._sleep(wait)

        raise GarminRateLimitError(f"Rate limited after {_MAX_RETRIES} retries: {last_exc}")
