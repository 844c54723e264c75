"""Data contract shared by the formatting engine and its callers."""

from enum import IntEnum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class GameMode(IntEnum):
    SCHEDULED = 0
    LIVE = 1
    FINAL = 2


class DisplayConfig(BaseModel):
    """
    Per-request filter and display options.

    Field aliases match the keys the dashboard sends (``hideBroadcasts`` etc.)
    so a payload can be validated as-is.
    """

    league: str
    teams: Optional[list[str]] = None
    hide_broadcasts: bool = Field(False, alias="hideBroadcasts")
    skip_channels: list[str] = Field(default_factory=list, alias="skipChannels")
    show_local_broadcasts: bool = Field(False, alias="showLocalBroadcasts")
    display_local_channels: list[str] = Field(
        default_factory=list, alias="displayLocalChannels"
    )
    local_markets: list[str] = Field(default_factory=list, alias="localMarkets")

    # None falls back to the process-wide settings.
    time_format: Optional[Literal[12, 24]] = Field(None, alias="timeFormat")
    timezone: Optional[str] = None

    class Config:
        populate_by_name = True


class TeamRecord(BaseModel):
    code: str
    long_name: str
    rank: Optional[int] = None
    score: Optional[int] = None
    logo_url: str = ""


class GameRecord(BaseModel):
    """Canonical, display-ready representation of one contest."""

    classes: set[str] = Field(default_factory=set)
    game_mode: GameMode
    home_team: TeamRecord
    visitor_team: TeamRecord
    status: list[str] = Field(default_factory=list)
    broadcast: list[str] = Field(default_factory=list)

    def to_display_dict(self) -> dict[str, Any]:
        """Flatten into the key layout the dashboard renders."""

        return {
            "classes": sorted(self.classes),
            "gameMode": int(self.game_mode),
            "hTeam": self.home_team.code,
            "vTeam": self.visitor_team.code,
            "hTeamLong": self.home_team.long_name,
            "vTeamLong": self.visitor_team.long_name,
            "hTeamRanking": self.home_team.rank,
            "vTeamRanking": self.visitor_team.rank,
            "hScore": self.home_team.score,
            "vScore": self.visitor_team.score,
            "status": list(self.status),
            "broadcast": list(self.broadcast),
            "hTeamLogoUrl": self.home_team.logo_url,
            "vTeamLogoUrl": self.visitor_team.logo_url,
        }


class ScoreGroup(BaseModel):
    label: str
    league: str
    date: str
    games: list[GameRecord] = Field(default_factory=list)
