"""Team/date selection and ordering of scorepanel events."""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable

from scorepanel.ingestion.events import (
    abbreviation_of,
    competitors_of,
    curated_rank_of,
    kickoff_of,
    split_home_away,
)

logger = logging.getLogger(__name__)

# Team-list token that also admits any event with a poll-ranked competitor.
TOP_25_TOKEN = "@T25"

_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def is_top_25(rank: int | None) -> bool:
    return rank is not None and 1 <= rank <= 25


def matches_teams(event: dict[str, Any], teams: list[str]) -> bool:
    competitors = competitors_of(event)
    if TOP_25_TOKEN in teams and any(
        is_top_25(curated_rank_of(competitor)) for competitor in competitors
    ):
        return True
    return any(abbreviation_of(competitor) in teams for competitor in competitors)


def filter_by_teams(
    events: Iterable[dict[str, Any]], teams: list[str] | None
) -> list[dict[str, Any]]:
    if teams is None:
        return list(events)
    return [event for event in events if matches_teams(event, teams)]


def filter_by_date(
    events: Iterable[dict[str, Any]], game_date: str, tz: tzinfo
) -> list[dict[str, Any]]:
    """Keep events whose kickoff falls on *game_date* (``YYYYMMDD``) in *tz*."""

    kept: list[dict[str, Any]] = []
    for event in events:
        kickoff = kickoff_of(event)
        if kickoff is None:
            logger.warning(
                "Dropping event id=%s without a valid start time",
                event.get("id") if isinstance(event, dict) else None,
            )
            continue
        try:
            local_day = kickoff.astimezone(tz).strftime("%Y%m%d")
        except OverflowError:
            logger.warning(
                "Dropping event id=%s with out-of-range start time %s",
                event.get("id"),
                kickoff.isoformat(),
            )
            continue
        if local_day == game_date:
            kept.append(event)
    return kept


def _away_code(event: dict[str, Any]) -> str:
    _, visitor = split_home_away(competitors_of(event))
    return abbreviation_of(visitor) or ""


def sort_key(event: dict[str, Any]) -> tuple[datetime, str]:
    kickoff = kickoff_of(event)
    try:
        start = kickoff.astimezone(timezone.utc) if kickoff is not None else _LATEST
    except OverflowError:
        start = _LATEST
    return (start, _away_code(event))


def sort_events(events: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Order by start time, then by away team abbreviation."""
    return sorted(events, key=sort_key)


def select_events(
    events: Any, teams: list[str] | None, game_date: str, tz: tzinfo
) -> list[dict[str, Any]]:
    if not isinstance(events, list):
        return []
    candidates = [event for event in events if isinstance(event, dict)]
    candidates = filter_by_teams(candidates, teams)
    candidates = filter_by_date(candidates, game_date, tz)
    return sort_events(candidates)
