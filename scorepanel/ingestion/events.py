"""Accessors for raw ESPN event dicts.

Feed payloads are loosely typed; every accessor tolerates missing or
mistyped keys and returns an empty value instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def competition_of(event: dict[str, Any]) -> dict[str, Any]:
    competitions = event.get("competitions") if isinstance(event, dict) else None
    if isinstance(competitions, list) and competitions:
        return _as_dict(competitions[0])
    return {}


def competitors_of(event: dict[str, Any]) -> list[dict[str, Any]]:
    competitors = competition_of(event).get("competitors")
    if not isinstance(competitors, list):
        return []
    return [competitor for competitor in competitors if isinstance(competitor, dict)]


def team_of(competitor: dict[str, Any]) -> dict[str, Any]:
    return _as_dict(competitor.get("team"))


def abbreviation_of(competitor: dict[str, Any]) -> str | None:
    value = team_of(competitor).get("abbreviation")
    return value if isinstance(value, str) and value else None


def curated_rank_of(competitor: dict[str, Any]) -> int | None:
    current = _as_dict(competitor.get("curatedRank")).get("current")
    if isinstance(current, bool):
        return None
    try:
        return int(current)
    except (TypeError, ValueError):
        return None


def split_home_away(
    competitors: list[dict[str, Any]],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return ``(home, visitor)`` using each competitor's ``homeAway`` flag.

    Feed order is only used to fill a side no competitor claims.
    """

    home: dict[str, Any] | None = None
    visitor: dict[str, Any] | None = None
    unflagged: list[dict[str, Any]] = []
    for competitor in competitors:
        side = competitor.get("homeAway")
        if side == "home" and home is None:
            home = competitor
        elif side == "away" and visitor is None:
            visitor = competitor
        else:
            unflagged.append(competitor)

    if home is None and unflagged:
        home = unflagged.pop(0)
    if visitor is None and unflagged:
        visitor = unflagged.pop(0)
    return home or {}, visitor or {}


def parse_datetime(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def kickoff_of(event: dict[str, Any]) -> datetime | None:
    kickoff = parse_datetime(competition_of(event).get("date"))
    if kickoff is None and isinstance(event, dict):
        kickoff = parse_datetime(event.get("date"))
    return kickoff
