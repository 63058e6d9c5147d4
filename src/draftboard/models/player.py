"""Player game-log snapshot models shared across ingestion and reporting."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerSnapshot(BaseModel):
    """Season-to-date box score line for one player.

    Upstream feeds send upper-case keys (``PLAYER_ID``, ``GP``...); the
    aliases accept those while attribute access stays snake_case.
    """

    player_id: int = Field(..., alias="PLAYER_ID")
    player_name: str = Field(..., alias="PLAYER_NAME")
    team_id: int | None = Field(..., alias="TEAM_ID")
    team_abbreviation: str | None = Field(..., alias="TEAM_ABBREVIATION")
    age: float = Field(..., alias="AGE")
    gp: int = Field(..., alias="GP")
    min: float = Field(..., alias="MIN")
    pts: float = Field(..., alias="PTS")
    fgm: float = Field(..., alias="FGM")
    fga: float = Field(..., alias="FGA")
    fg_pct: float = Field(..., alias="FG_PCT")
    fg3m: float = Field(..., alias="FG3M")
    fg3a: float = Field(..., alias="FG3A")
    fg3_pct: float = Field(..., alias="FG3_PCT")
    ftm: float = Field(..., alias="FTM")
    fta: float = Field(..., alias="FTA")
    ft_pct: float = Field(..., alias="FT_PCT")
    reb: float = Field(..., alias="REB")
    ast: float = Field(..., alias="AST")
    stl: float = Field(..., alias="STL")
    blk: float = Field(..., alias="BLK")
    tov: float = Field(..., alias="TOV")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PlayerSnapshotRecord(PlayerSnapshot):
    """Stored snapshot row, keyed by (snapshot_date, player_id)."""

    snapshot_date: str


STAT_COLUMNS: tuple[str, ...] = (
    "age",
    "gp",
    "min",
    "pts",
    "fgm",
    "fga",
    "fg_pct",
    "fg3m",
    "fg3a",
    "fg3_pct",
    "ftm",
    "fta",
    "ft_pct",
    "reb",
    "ast",
    "stl",
    "blk",
    "tov",
)
