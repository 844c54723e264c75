from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from scorepanel.ingestion.schema import DisplayConfig, ScoreGroup


class ScoresQuery(DisplayConfig):
    date: Optional[str] = None
    which_day: Optional[Literal["today", "both"]] = Field(None, alias="whichDay")

    def display_config(self) -> DisplayConfig:
        return DisplayConfig(**self.model_dump(exclude={"date", "which_day"}))


class ScoreGroupOut(BaseModel):
    label: str
    league: str
    date: str
    count: int
    games: list[dict[str, Any]]

    @classmethod
    def from_group(cls, group: ScoreGroup) -> "ScoreGroupOut":
        return cls(
            label=group.label,
            league=group.league,
            date=group.date,
            count=len(group.games),
            games=[game.to_display_dict() for game in group.games],
        )


class ScoresOut(BaseModel):
    league: str
    date: str
    ok: bool
    error: Optional[str] = None
    groups: list[ScoreGroupOut]


class LogosOut(BaseModel):
    root: str
    logos: dict[str, list[str]]
