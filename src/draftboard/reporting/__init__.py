"""Draft grading, name matching, and waiver-wire reporting."""

from .aggregation import (
    TeamAggregate,
    TeamLifetimeSummary,
    aggregate_teams,
    secondary_metric,
    sort_by_rating,
    summarize_team,
)
from .names import PlayerMatch, match_games_played, normalize_name
from .report import (
    MatchingPlayersReport,
    TeamPicks,
    TeamReport,
    WaiverReport,
    matching_players,
    team_picks,
    team_report,
    team_summary,
    waiver_report,
)
from .transactions import UNKNOWN_TEAM, TransactionFilter, filter_transactions, group_by_team
from .verdicts import average_score, score
from .weeks import current_week, week_bounds, week_number

__all__ = [
    "TeamAggregate",
    "TeamLifetimeSummary",
    "aggregate_teams",
    "secondary_metric",
    "sort_by_rating",
    "summarize_team",
    "PlayerMatch",
    "match_games_played",
    "normalize_name",
    "MatchingPlayersReport",
    "TeamPicks",
    "TeamReport",
    "WaiverReport",
    "matching_players",
    "team_picks",
    "team_report",
    "team_summary",
    "waiver_report",
    "UNKNOWN_TEAM",
    "TransactionFilter",
    "filter_transactions",
    "group_by_team",
    "average_score",
    "score",
    "current_week",
    "week_bounds",
    "week_number",
]
