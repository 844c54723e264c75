"""Formatter turning one ESPN scorepanel score group into game records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from scorepanel.ingestion.broadcasts import resolve_broadcasts
from scorepanel.ingestion.events import (
    competition_of,
    competitors_of,
    curated_rank_of,
    kickoff_of,
    split_home_away,
    team_of,
)
from scorepanel.ingestion.filters import is_top_25, select_events
from scorepanel.ingestion.schema import DisplayConfig, GameRecord, TeamRecord
from scorepanel.ingestion.status import classify_status
from scorepanel.settings import Settings, get_settings, resolve_timezone

logger = logging.getLogger(__name__)

# Leagues that show "<abbr> <name>" and poll rankings.
COLLEGIATE_LEAGUES = frozenset({"NCAAF", "NCAAM"})

# Aggregate view listing only games that have a visible broadcast.
ON_TV_LEAGUE = "SOCCER_ON_TV"


@dataclass(frozen=True)
class AbbreviationOverride:
    league: str
    abbreviation: str
    location: str
    replacement: str


# Same ESPN abbreviation used by different schools across divisions. The
# trailing space selects a distinct logo file and collapses when rendered.
ABBREVIATION_OVERRIDES: tuple[AbbreviationOverride, ...] = (
    AbbreviationOverride("NCAAF", "SDSU", "South Dakota State", "SDSU "),
)


def _safe_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed >= 0 else None


def format_t25_ranking(rank: Any) -> int | None:
    if isinstance(rank, bool) or not isinstance(rank, int):
        return None
    return rank if is_top_25(rank) else None


def _team_name(team: dict[str, Any]) -> str:
    for key in ("name", "displayName", "shortDisplayName"):
        value = team.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def team_code(league: str, team: dict[str, Any]) -> str:
    abbreviation = team.get("abbreviation")
    if not isinstance(abbreviation, str) or not abbreviation:
        return _team_name(team)[:4].upper() + " "

    location = team.get("location") if isinstance(team.get("location"), str) else ""
    for override in ABBREVIATION_OVERRIDES:
        if (
            override.league == league
            and override.abbreviation == abbreviation
            and override.location in location
        ):
            return override.replacement
    return abbreviation


def long_name(league: str, team: dict[str, Any], code: str) -> str:
    if league in COLLEGIATE_LEAGUES:
        abbreviation = team.get("abbreviation")
        prefix = f"{code} " if isinstance(abbreviation, str) and abbreviation else ""
        return prefix + _team_name(team)
    short_name = team.get("shortDisplayName")
    if isinstance(short_name, str) and short_name:
        return short_name
    return _team_name(team)


def build_team(league: str, competitor: dict[str, Any]) -> TeamRecord:
    team = team_of(competitor)
    code = team_code(league, team)
    rank = None
    if league in COLLEGIATE_LEAGUES:
        rank = format_t25_ranking(curated_rank_of(competitor))
    logo = team.get("logo")
    return TeamRecord(
        code=code,
        long_name=long_name(league, team, code),
        rank=rank,
        score=_safe_int(competitor.get("score")),
        logo_url=logo if isinstance(logo, str) and logo else "",
    )


def build_record(
    event: dict[str, Any],
    config: DisplayConfig,
    time_format: int,
    tz: tzinfo,
) -> GameRecord:
    competition = competition_of(event)
    competitors = competitors_of(event)
    home, visitor = split_home_away(competitors)

    status = event.get("status") or competition.get("status")
    result = classify_status(status, home, visitor, kickoff_of(event), time_format, tz)

    broadcasts = resolve_broadcasts(competition.get("broadcasts"), competitors, config)
    if broadcasts.rejected:
        logger.debug(
            "Local channels available for %s: %s",
            event.get("shortName") or event.get("id"),
            ", ".join(broadcasts.rejected),
        )

    return GameRecord(
        classes=result.classes,
        game_mode=result.phase,
        home_team=build_team(config.league, home),
        visitor_team=build_team(config.league, visitor),
        status=result.status,
        broadcast=broadcasts.channels if result.shows_broadcast else [],
    )


def display_timezone(config: DisplayConfig, settings: Settings | None = None) -> tzinfo:
    """Zone used for "today", the date filter and kickoff times."""
    settings = settings or get_settings()
    return resolve_timezone(config.timezone or settings.timezone)


def format_scores(
    config: DisplayConfig,
    score_group: dict[str, Any],
    game_date: str,
    settings: Settings | None = None,
) -> list[GameRecord]:
    """Format one score group into records ordered by start time.

    *game_date* is ``YYYYMMDD`` in the configured timezone. Malformed events
    are logged and skipped; this function does not raise on feed content.
    """

    settings = settings or get_settings()
    time_format = config.time_format or settings.time_format
    tz = display_timezone(config, settings)

    events = score_group.get("events") if isinstance(score_group, dict) else None
    selected = select_events(events, config.teams, game_date, tz)

    records: list[GameRecord] = []
    for event in selected:
        try:
            record = build_record(event, config, time_format, tz)
        except Exception:
            logger.exception(
                "Failed formatting event id=%s league=%s", event.get("id"), config.league
            )
            continue
        records.append(record)

    if config.league == ON_TV_LEAGUE:
        records = [record for record in records if record.broadcast]

    return records
