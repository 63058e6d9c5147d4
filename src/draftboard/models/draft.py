"""Draft pick records and the closed vocabularies used to report on them."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Verdict(str, Enum):
    """Judgement of a pick's production relative to its draft slot."""

    STEAL = "Steal"
    VALUE = "Value"
    FAIR = "Fair"
    REACH = "Reach"
    BUST = "Bust"
    NO_VERDICT = "No Verdict"

    @classmethod
    def lookup(cls, value: object) -> "Verdict | None":
        """Exact-match a raw label, returning ``None`` for anything unrecognised."""

        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def badge_style(self) -> str:
        return _VERDICT_BADGES[self]


_VERDICT_BADGES: dict[Verdict, str] = {
    Verdict.STEAL: "verdict-steal",
    Verdict.VALUE: "verdict-value",
    Verdict.FAIR: "verdict-fair",
    Verdict.REACH: "verdict-reach",
    Verdict.BUST: "verdict-bust",
    Verdict.NO_VERDICT: "verdict-none",
}


class EvalMethod(str, Enum):
    """Secondary metric shown next to each team's average rating."""

    AVERAGE_PPG = "average_ppg"
    WEIGHTED_PPG = "weighted_ppg"
    TOTAL_POINTS = "total_points"

    @property
    def label(self) -> str:
        return _EVAL_LABELS[self][0]

    @property
    def column(self) -> str:
        return _EVAL_LABELS[self][1]


# (selector label, table column heading)
_EVAL_LABELS: dict[EvalMethod, tuple[str, str]] = {
    EvalMethod.AVERAGE_PPG: ("Average PPG", "PPG"),
    EvalMethod.WEIGHTED_PPG: ("Slot-weighted PPG", "Weighted PPG"),
    EvalMethod.TOTAL_POINTS: ("Total Points", "Total Points"),
}


class DraftPick(BaseModel):
    """One pick as submitted by the draft grader."""

    pick_number: int = Field(..., gt=0)
    round: int = Field(..., gt=0)
    overall_pick: int = Field(..., gt=0)
    player_id: int = Field(..., gt=0)
    season: int
    verdict: str = Field(..., min_length=1)
    draft_round_fantasy_per_game_average: float
    fantasy_points_per_game: float
    player_name: str = Field(..., min_length=1)
    team_name: str = Field(..., min_length=1)
    team_id: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class DraftRatingRecord(DraftPick):
    """Stored pick, tagged with the snapshot that produced it."""

    snapshot_timestamp: str
