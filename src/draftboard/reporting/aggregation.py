"""Per-team draft grades computed from stored picks."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import Iterable, Sequence

from draftboard.models import DraftRatingRecord, EvalMethod
from draftboard.reporting.verdicts import average_score


@dataclass(frozen=True)
class TeamAggregate:
    """Grade for one team within a single (season, snapshot) partition."""

    team_id: int
    team_name: str
    total_picks: int
    average_rating: float | None
    avg_points_per_pick: float | None
    weighted_ppg: float | None
    total_points: float


@dataclass(frozen=True)
class TeamLifetimeSummary:
    """Grade for one team across the latest snapshot of every season."""

    team_id: int
    team_name: str
    total_picks: int
    lifetime_rating: float | None
    lifetime_ppg: float | None
    seasons_drafted: int


_SECONDARY_FIELDS: dict[EvalMethod, str] = {
    EvalMethod.AVERAGE_PPG: "avg_points_per_pick",
    EvalMethod.WEIGHTED_PPG: "weighted_ppg",
    EvalMethod.TOTAL_POINTS: "total_points",
}


def secondary_metric(team: TeamAggregate, method: EvalMethod) -> float | None:
    """Figure shown beside the rating for the selected evaluation method."""

    return getattr(team, _SECONDARY_FIELDS[method])


def _weighted_ppg(picks: Sequence[DraftRatingRecord]) -> float | None:
    # Weight each pick by what its round typically produces.
    weight_total = sum(pick.draft_round_fantasy_per_game_average for pick in picks)
    if not weight_total:
        return None
    weighted = sum(
        pick.fantasy_points_per_game * pick.draft_round_fantasy_per_game_average for pick in picks
    )
    return round(weighted / weight_total, 1)


def _build_aggregate(team_id: int, team_name: str, picks: Sequence[DraftRatingRecord]) -> TeamAggregate:
    points = [pick.fantasy_points_per_game for pick in picks]
    return TeamAggregate(
        team_id=team_id,
        team_name=team_name,
        total_picks=len(picks),
        average_rating=average_score(pick.verdict for pick in picks),
        avg_points_per_pick=round(fmean(points), 1) if points else None,
        weighted_ppg=_weighted_ppg(picks),
        total_points=round(sum(points), 1),
    )


def sort_by_rating(teams: Iterable[TeamAggregate]) -> list[TeamAggregate]:
    """Highest rating first, unrated teams last, ties in their original order."""

    return sorted(
        teams,
        key=lambda team: (team.average_rating is None, -(team.average_rating or 0.0)),
    )


def aggregate_teams(records: Iterable[DraftRatingRecord]) -> list[TeamAggregate]:
    """Group one partition's picks by (team_id, team_name) and grade each group.

    Every evaluation method shares this grouping and ordering; see
    :func:`secondary_metric` for the per-method figure.
    """

    groups: dict[tuple[int, str], list[DraftRatingRecord]] = {}
    for record in records:
        groups.setdefault((record.team_id, record.team_name), []).append(record)
    aggregates = [
        _build_aggregate(team_id, team_name, picks) for (team_id, team_name), picks in groups.items()
    ]
    return sort_by_rating(aggregates)


def summarize_team(records: Iterable[DraftRatingRecord], team_id: int) -> TeamLifetimeSummary | None:
    """Lifetime grade for ``team_id``; ``None`` when the team has no picks."""

    picks = [record for record in records if record.team_id == team_id]
    if not picks:
        return None
    newest = max(picks, key=lambda pick: (pick.season, pick.snapshot_timestamp))
    round_averages = [pick.draft_round_fantasy_per_game_average for pick in picks]
    return TeamLifetimeSummary(
        team_id=team_id,
        team_name=newest.team_name,
        total_picks=len(picks),
        lifetime_rating=average_score(pick.verdict for pick in picks),
        lifetime_ppg=round(fmean(round_averages), 1),
        seasons_drafted=len({pick.season for pick in picks}),
    )
