"""CSV export helpers for team rating reports."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from draftboard.models import DraftRatingRecord
from draftboard.reporting import TeamReport, secondary_metric


def _format_number(value: float | None, digits: int) -> str:
    return "" if value is None else f"{value:.{digits}f}"


def export_team_report_to_csv(report: TeamReport) -> str:
    """One row per team in report order, secondary column named for the method."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Rank", "Team ID", "Team", "Picks", "Rating", report.method.column])
    for rank, team in enumerate(report.teams, start=1):
        writer.writerow(
            [
                rank,
                team.team_id,
                team.team_name,
                team.total_picks,
                _format_number(team.average_rating, 2),
                _format_number(secondary_metric(team, report.method), 1),
            ]
        )
    return buffer.getvalue()


def export_picks_to_csv(picks: Sequence[DraftRatingRecord]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(
        ["Season", "Round", "Pick", "Overall", "Player ID", "Player", "Verdict", "Round PPG", "Player PPG"]
    )
    for pick in picks:
        writer.writerow(
            [
                pick.season,
                pick.round,
                pick.pick_number,
                pick.overall_pick,
                pick.player_id,
                pick.player_name,
                pick.verdict,
                _format_number(pick.draft_round_fantasy_per_game_average, 1),
                _format_number(pick.fantasy_points_per_game, 1),
            ]
        )
    return buffer.getvalue()


__all__ = [
    "export_picks_to_csv",
    "export_team_report_to_csv",
]
