"""Garmin Connect session helpers.

Token refresh is handled by garminconnect/garth; this module only resumes
a saved session or performs a fresh login and persists its tokens.
"""

from __future__ import annotations

import logging
from pathlib import Path

from garminconnect import Garmin

from garmin_client.exceptions import GarminAuthError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_DIR = Path("~/.garminconnect").expanduser()


def _has_tokens(token_dir: Path) -> bool:
    return (token_dir / "oauth1_token.json").exists()


def resume_session(token_dir: Path | str = DEFAULT_TOKEN_DIR) -> Garmin:
    """Resume a session from saved tokens (no credentials needed).

    Raises ``GarminAuthError`` if tokens are missing or expired.
    """
    token_dir = Path(token_dir).expanduser()
    if not _has_tokens(token_dir):
        raise GarminAuthError(f"No saved tokens at {token_dir}")
    try:
        garmin = Garmin()
        garmin.login(tokenstore=str(token_dir))
    except Exception as exc:
        raise GarminAuthError(f"Token resume failed: {exc}") from exc
    logger.debug("Resumed session from %s", token_dir)
    return garmin


def create_session(
    email: str, password: str, token_dir: Path | str = DEFAULT_TOKEN_DIR
) -> Garmin:
    """Resume from saved tokens if possible, otherwise log in and save tokens."""
    token_dir = Path(token_dir).expanduser()
    if _has_tokens(token_dir):
        try:
            return resume_session(token_dir)
        except GarminAuthError:
            logger.info("Token resume failed, trying fresh login")

    try:
        token_dir.mkdir(parents=True, exist_ok=True)
        garmin = Garmin(email=email, password=password)
        garmin.login()
        garmin.garth.dump(str(token_dir))
    except Exception as exc:
        raise GarminAuthError(f"Login failed: {exc}") from exc
    logger.info("Logged in and saved tokens to %s", token_dir)
    return garmin
