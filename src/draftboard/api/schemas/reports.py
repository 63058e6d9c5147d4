from __future__ import annotations

from typing import List

from pydantic import BaseModel


class TeamRatingResponse(BaseModel):
    team_id: int
    team_name: str
    total_picks: int
    average_rating: float | None
    avg_points_per_pick: float | None
    weighted_ppg: float | None
    total_points: float
    secondary_metric: float | None


class TeamRatingsResponse(BaseModel):
    season: int
    snapshot_timestamp: str | None
    eval_method: str
    teams: List[TeamRatingResponse]


class MatchingPlayerResponse(BaseModel):
    draft_name: str
    draft_id: int
    gp: int


class MatchingPlayersResponse(BaseModel):
    season: int
    snapshot_date: str | None
    results: List[MatchingPlayerResponse]
