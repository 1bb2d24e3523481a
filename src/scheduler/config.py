"""Environment-variable-based configuration for the nightly load sync."""

from __future__ import annotations

import os
from pathlib import Path

LOAD_STORE_DIR: Path = Path(os.environ.get("LOAD_STORE_DIR", "~/.load_engine/store")).expanduser()
ATHLETES_FILE: Path = Path(os.environ.get("ATHLETES_FILE", "athletes.json")).expanduser()
GARMIN_TOKEN_DIR: Path = Path(os.environ.get("GARMIN_TOKEN_DIR", "~/.garminconnect")).expanduser()
LOAD_MODEL: str = os.environ.get("LOAD_MODEL", "edwards")
SYNC_LOOKBACK_DAYS: int = int(os.environ.get("SYNC_LOOKBACK_DAYS", "3"))
BACKFILL_PAUSE_S: float = float(os.environ.get("BACKFILL_PAUSE_S", "0.25"))
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "3"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
