"""Fetch scorepanel feeds and format every score group they contain."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Literal, Optional

from scorepanel.ingestion.espn_client import fetch_scorepanel, normalize_date, today_in
from scorepanel.ingestion.espn_parser import display_timezone, format_scores
from scorepanel.ingestion.schema import DisplayConfig, ScoreGroup
from scorepanel.settings import Settings, get_settings

logger = logging.getLogger(__name__)

WhichDay = Literal["today", "both"]


@dataclass
class ScoresRequest:
    config: DisplayConfig
    game_date: Optional[date | str] = None


@dataclass
class ScoresResponse:
    league: str
    date: str
    groups: list[ScoreGroup] = field(default_factory=list)
    ok: bool = True
    error: str | None = None


def _group_label(group: dict[str, Any], fallback: str) -> str:
    leagues = group.get("leagues")
    if isinstance(leagues, list) and leagues and isinstance(leagues[0], dict):
        name = leagues[0].get("name")
        if isinstance(name, str) and name:
            return name
    return fallback


def split_score_groups(body: dict[str, Any], league_key: str) -> list[tuple[str, dict]]:
    """Return ``(label, group)`` pairs from a scorepanel or scoreboard body.

    Scoreboard-shaped bodies (events at the top level) count as one group.
    """

    scores = body.get("scores")
    if isinstance(scores, list):
        return [
            (_group_label(group, league_key), group)
            for group in scores
            if isinstance(group, dict)
        ]
    if isinstance(body.get("events"), list):
        return [(_group_label(body, league_key), body)]
    return []


def get_scores(
    config: DisplayConfig,
    game_date: Optional[date | str] = None,
    settings: Settings | None = None,
) -> list[ScoreGroup]:
    """Fetch one league/date and return its formatted score groups.

    Fetch failures are logged and produce an empty list.
    """

    settings = settings or get_settings()
    target = normalize_date(game_date, display_timezone(config, settings))
    payload = fetch_scorepanel(config.league, target)
    if not isinstance(payload, dict):
        logger.error(
            "Unexpected ESPN body league=%s date=%s type=%s",
            config.league,
            target,
            type(payload).__name__,
        )
        return []
    if payload.get("error"):
        logger.error(
            "Fetch error league=%s date=%s error=%s details=%s",
            config.league,
            target,
            payload.get("error"),
            payload.get("details"),
        )
        return []

    groups: list[ScoreGroup] = []
    for label, group in split_score_groups(payload, config.league):
        games = format_scores(config, group, target, settings)
        groups.append(ScoreGroup(label=label, league=config.league, date=target, games=games))

    logger.info(
        "Formatted %s games in %s groups for league=%s date=%s",
        sum(len(group.games) for group in groups),
        len(groups),
        config.league,
        target,
    )
    return groups


def expand_which_day(
    config: DisplayConfig,
    game_date: Optional[date | str] = None,
    which_day: Optional[WhichDay] = None,
    today: date | None = None,
    settings: Settings | None = None,
) -> list[ScoresRequest]:
    """Build the requests for one configured league.

    ``which_day="both"`` asks for today and yesterday in the display zone,
    ignoring *game_date*.
    """

    if which_day == "both":
        today = today or today_in(display_timezone(config, settings))
        return [
            ScoresRequest(config, today),
            ScoresRequest(config, today - timedelta(days=1)),
        ]
    return [ScoresRequest(config, game_date)]


def _run_request(request: ScoresRequest, settings: Settings | None) -> ScoresResponse:
    target = normalize_date(request.game_date, display_timezone(request.config, settings))
    groups = get_scores(request.config, target, settings)
    return ScoresResponse(league=request.config.league, date=target, groups=groups)


async def _run_isolated(request: ScoresRequest, settings: Settings | None) -> ScoresResponse:
    try:
        return await asyncio.to_thread(_run_request, request, settings)
    except Exception as exc:
        logger.exception(
            "Scores request failed league=%s date=%s",
            request.config.league,
            request.game_date,
        )
        return ScoresResponse(
            league=request.config.league,
            date=str(request.game_date or ""),
            ok=False,
            error=str(exc),
        )


async def collect_scores(
    requests: list[ScoresRequest], settings: Settings | None = None
) -> list[ScoresResponse]:
    """Run every request concurrently; one failure never affects the others.

    Responses come back in request order.
    """

    if not requests:
        return []
    return list(await asyncio.gather(*(_run_isolated(r, settings) for r in requests)))
