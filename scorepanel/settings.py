from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal import get_localzone

logger = logging.getLogger(__name__)
_SETTINGS: Settings | None = None

DEFAULT_ESPN_BASE_URL = "https://site.api.espn.com"
DEFAULT_TIME_FORMAT = 12
DEFAULT_LOGO_DIR = "logos"
DEFAULT_RESULT_LIMIT = 200


@dataclass(frozen=True)
class Settings:
    espn_base_url: str = DEFAULT_ESPN_BASE_URL
    time_format: int = DEFAULT_TIME_FORMAT
    timezone: str | None = None
    logo_dir: str = DEFAULT_LOGO_DIR
    result_limit: int = DEFAULT_RESULT_LIMIT


def _env_int(name: str, default: int, allowed: set[int] | None = None) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer. Using %s.", name, raw, default)
        return default
    if allowed is not None and value not in allowed:
        logger.warning(
            "%s=%s not in %s. Using %s.", name, value, sorted(allowed), default
        )
        return default
    return value


def load_settings() -> Settings:
    return Settings(
        espn_base_url=(os.getenv("ESPN_BASE_URL") or DEFAULT_ESPN_BASE_URL).rstrip("/"),
        time_format=_env_int("SCOREPANEL_TIME_FORMAT", DEFAULT_TIME_FORMAT, {12, 24}),
        timezone=(os.getenv("SCOREPANEL_TIMEZONE") or "").strip() or None,
        logo_dir=os.getenv("SCOREPANEL_LOGO_DIR") or DEFAULT_LOGO_DIR,
        result_limit=_env_int("SCOREPANEL_RESULT_LIMIT", DEFAULT_RESULT_LIMIT),
    )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def resolve_timezone(name: str | None) -> tzinfo:
    """Return the zone for *name*, or the host zone (DST-aware) when unset."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r. Falling back to local time.", name)
    return get_localzone()
