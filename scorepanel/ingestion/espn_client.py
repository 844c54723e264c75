"""ESPN HTTP client for fetching scorepanel feeds."""

from __future__ import annotations

import json
import logging
import re
import time
from datetime import date, datetime, tzinfo
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from scorepanel.ingestion.leagues import classify_league
from scorepanel.settings import get_settings, resolve_timezone

logger = logging.getLogger(__name__)
SCOREBOARD_BASE_PATH = "/apis/site/v2/sports"
DEFAULT_TIMEOUT_SECONDS = 12
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_SECONDS = 0.5
DEFAULT_USER_AGENT = "scorepanel/1.0 (+https://example.local)"


def today_in(tz: tzinfo | None = None) -> date:
    """Return the current calendar day in *tz* (default: configured zone)."""
    if tz is None:
        tz = resolve_timezone(get_settings().timezone)
    return datetime.now(tz).date()


def normalize_date(value: str | date | None, tz: tzinfo | None = None) -> str:
    """Return *value* as ``YYYYMMDD``; ``None`` and ``"today"`` mean today in *tz*."""
    if value is None:
        return today_in(tz).strftime("%Y%m%d")
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    cleaned = value.strip()
    if not cleaned or cleaned.lower() == "today":
        return today_in(tz).strftime("%Y%m%d")
    if re.fullmatch(r"\d{8}", cleaned):
        return cleaned
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", cleaned):
        return cleaned.replace("-", "")
    raise ValueError("date must be YYYYMMDD or YYYY-MM-DD")


def build_scorepanel_url(
    api_path: str,
    dates: str | date | None = None,
    limit: int | None = None,
    base_url: str | None = None,
) -> str:
    base = (base_url or get_settings().espn_base_url).rstrip("/")
    params: dict[str, str] = {"dates": normalize_date(dates)}
    if limit:
        params["limit"] = str(limit)
    return f"{base}{SCOREBOARD_BASE_PATH}/{api_path.strip('/')}?{urlencode(params)}"


def fetch_scorepanel(league_key: str, game_date: Optional[date | str] = None) -> dict:
    """Fetch the ESPN scorepanel body for a league and date.

    Returns parsed JSON on success. On failure, returns a controlled error dict.
    """

    try:
        safe_date = normalize_date(game_date)
    except ValueError as exc:
        return {
            "ok": False,
            "error": str(exc),
            "league": league_key,
            "date": None,
        }

    settings = get_settings()
    descriptor = classify_league(league_key)
    url = build_scorepanel_url(
        descriptor.api_path, safe_date, settings.result_limit, settings.espn_base_url
    )
    headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }

    last_error: str | None = None
    last_status: int | None = None
    last_body_snippet: str | None = None
    for attempt in range(DEFAULT_RETRIES):
        try:
            request = Request(url, headers=headers)
            with urlopen(request, timeout=DEFAULT_TIMEOUT_SECONDS) as response:
                status = getattr(response, "status", None)
                payload = response.read().decode("utf-8")
                if status and status != 200:
                    body_snippet = payload[:300]
                    logger.error(
                        "ESPN scorepanel non-200 status=%s body=%s",
                        status,
                        body_snippet,
                    )
                    return {
                        "ok": False,
                        "error": "ESPN returned non-200 response",
                        "status": status,
                        "body": body_snippet,
                        "league": league_key,
                        "date": safe_date,
                        "url": url,
                    }
                logger.debug("%s fetched for %s", url, league_key)
                return json.loads(payload)
        except HTTPError as exc:
            last_status = exc.code
            body = exc.read().decode("utf-8") if exc.fp else ""
            last_body_snippet = body[:300]
            logger.error(
                "ESPN scorepanel HTTPError status=%s body=%s",
                last_status,
                last_body_snippet,
            )
            last_error = str(exc)
            if attempt < DEFAULT_RETRIES - 1:
                time.sleep(DEFAULT_BACKOFF_SECONDS * (2**attempt))
        except (URLError, TimeoutError, json.JSONDecodeError) as exc:
            last_error = str(exc)
            logger.warning(
                "ESPN scorepanel attempt %s/%s failed url=%s error=%s",
                attempt + 1,
                DEFAULT_RETRIES,
                url,
                last_error,
            )
            if attempt < DEFAULT_RETRIES - 1:
                time.sleep(DEFAULT_BACKOFF_SECONDS * (2**attempt))

    return {
        "ok": False,
        "error": "Failed to fetch ESPN scorepanel",
        "details": last_error,
        "status": last_status,
        "body": last_body_snippet,
        "league": league_key,
        "date": safe_date,
        "url": url,
    }
