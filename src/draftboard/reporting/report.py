"""Report builders: read the latest snapshot from a store and shape it for display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from draftboard.models import DraftRatingRecord, EvalMethod, TransactionView
from draftboard.persistence import DraftStore
from draftboard.reporting.aggregation import (
    TeamAggregate,
    TeamLifetimeSummary,
    aggregate_teams,
    summarize_team,
)
from draftboard.reporting.names import PlayerMatch, match_games_played
from draftboard.reporting.transactions import (
    TransactionFilter,
    filter_transactions,
    group_by_team,
    transactions_in_week,
)
from draftboard.reporting.weeks import current_week, week_bounds


@dataclass(frozen=True)
class TeamReport:
    season: int
    snapshot_timestamp: str | None
    method: EvalMethod
    teams: List[TeamAggregate]


@dataclass(frozen=True)
class TeamPicks:
    season: int
    snapshot_timestamp: str | None
    team_id: int
    picks: List[DraftRatingRecord]

    @property
    def team_name(self) -> str | None:
        return self.picks[0].team_name if self.picks else None


@dataclass(frozen=True)
class WaiverReport:
    week: int
    current_week: int
    kind: TransactionFilter
    week_start: date
    week_end: date
    groups: dict[str, List[TransactionView]]

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def period(self) -> str:
        """Header date range; week 1 also holds moves made before the season start."""

        if self.week == 1:
            return f"On or before {self.week_end.isoformat()}"
        return f"{self.week_start.isoformat()} to {self.week_end.isoformat()}"


@dataclass(frozen=True)
class MatchingPlayersReport:
    season: int
    snapshot_date: str | None
    matches: List[PlayerMatch]


def team_report(
    store: DraftStore,
    season: int,
    method: EvalMethod = EvalMethod.AVERAGE_PPG,
) -> TeamReport:
    """Team ratings for the newest snapshot of ``season``; empty when there is none."""

    snapshot = store.latest_snapshot(season)
    if snapshot is None:
        return TeamReport(season=season, snapshot_timestamp=None, method=method, teams=[])
    records = store.list_draft_ratings(season=season, snapshot_timestamp=snapshot)
    return TeamReport(
        season=season,
        snapshot_timestamp=snapshot,
        method=method,
        teams=aggregate_teams(records),
    )


def team_picks(store: DraftStore, team_id: int, season: int) -> TeamPicks:
    snapshot = store.latest_snapshot(season)
    picks: List[DraftRatingRecord] = []
    if snapshot is not None:
        picks = store.list_draft_ratings(season=season, snapshot_timestamp=snapshot, team_id=team_id)
    return TeamPicks(season=season, snapshot_timestamp=snapshot, team_id=team_id, picks=picks)


def team_summary(store: DraftStore, team_id: int) -> TeamLifetimeSummary:
    """Lifetime grade for ``team_id``; a zero-pick placeholder when it never drafted."""

    summary = summarize_team(store.list_latest_team_ratings(team_id), team_id)
    if summary is None:
        return TeamLifetimeSummary(
            team_id=team_id,
            team_name=f"Team {team_id}",
            total_picks=0,
            lifetime_rating=None,
            lifetime_ppg=None,
            seasons_drafted=0,
        )
    return summary


def waiver_report(
    store: DraftStore,
    *,
    league_start: date,
    week: int | None = None,
    kind: TransactionFilter = TransactionFilter.ALL,
    today: date | None = None,
) -> WaiverReport:
    """Transactions for one league week, grouped by team.

    ``week`` defaults to the week containing ``today``.
    """

    this_week = current_week(league_start, today)
    selected = week if week is not None else this_week
    rows = transactions_in_week(store.list_transaction_views(), selected, league_start)
    start, end = week_bounds(selected, league_start)
    return WaiverReport(
        week=selected,
        current_week=this_week,
        kind=kind,
        week_start=start,
        week_end=end,
        groups=group_by_team(filter_transactions(rows, kind)),
    )


def matching_players(store: DraftStore, season: int) -> MatchingPlayersReport:
    snapshot_date = store.latest_player_snapshot_date()
    snapshots = store.list_player_snapshots(snapshot_date) if snapshot_date else []
    return MatchingPlayersReport(
        season=season,
        snapshot_date=snapshot_date,
        matches=match_games_played(store.list_draft_players(season), snapshots),
    )
