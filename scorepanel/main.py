from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import ValidationError

from scorepanel.ingestion.espn_client import normalize_date
from scorepanel.ingestion.schema import DisplayConfig
from scorepanel.ingestion.sync import (
    ScoresRequest,
    ScoresResponse,
    collect_scores,
    expand_which_day,
)
from scorepanel.log_buffer import get_buffer_handler, install_buffer_handler
from scorepanel.schemas import LogosOut, ScoreGroupOut, ScoresOut, ScoresQuery
from scorepanel.settings import get_settings
from scorepanel.team_logos import scan_local_logos

app = FastAPI(title="Scorepanel")
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def startup() -> None:
    install_buffer_handler()
    settings = get_settings()
    logger.info(
        "Scorepanel starting: time_format=%s timezone=%s logo_dir=%s",
        settings.time_format,
        settings.timezone or "local",
        settings.logo_dir,
    )


def _check_date(value: str | None) -> None:
    try:
        normalize_date(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _split_csv(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    values = [value.strip() for value in raw.split(",") if value.strip()]
    return values or None


def _to_out(response: ScoresResponse) -> ScoresOut:
    return ScoresOut(
        league=response.league,
        date=response.date,
        ok=response.ok,
        error=response.error,
        groups=[ScoreGroupOut.from_group(group) for group in response.groups],
    )


async def _run(requests: list[ScoresRequest]) -> list[ScoresOut]:
    responses = await collect_scores(requests)
    return [_to_out(response) for response in responses]


@app.get("/api/scores", response_model=list[ScoresOut])
async def api_scores(
    league: str,
    date: str | None = None,
    teams: str | None = None,
    which_day: Optional[Literal["today", "both"]] = None,
    hide_broadcasts: bool = False,
    show_local_broadcasts: bool = False,
    time_format: int | None = None,
    timezone: str | None = None,
):
    _check_date(date)
    leagues = _split_csv(league) or []
    if not leagues:
        raise HTTPException(status_code=400, detail="league is required")

    requests: list[ScoresRequest] = []
    for league_key in leagues:
        try:
            config = DisplayConfig(
                league=league_key,
                teams=_split_csv(teams),
                hide_broadcasts=hide_broadcasts,
                show_local_broadcasts=show_local_broadcasts,
                time_format=time_format,
                timezone=timezone,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors()) from exc
        requests.extend(expand_which_day(config, date, which_day))

    return await _run(requests)


@app.post("/api/scores", response_model=list[ScoresOut])
async def api_scores_post(query: ScoresQuery):
    _check_date(query.date)
    requests = expand_which_day(query.display_config(), query.date, query.which_day)
    return await _run(requests)


@app.get("/api/logos", response_model=LogosOut)
def api_logos():
    root = get_settings().logo_dir
    return LogosOut(root=root, logos=scan_local_logos(root))


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str | None = None):
    handler = get_buffer_handler()
    return {"entries": handler.entries(limit=limit, level=level)}
