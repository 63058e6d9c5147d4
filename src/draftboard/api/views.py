"""Server-rendered pages and htmx fragments."""

from __future__ import annotations

from html import escape
from typing import Sequence
from urllib.parse import urlencode

from draftboard.models import EvalMethod, Verdict
from draftboard.reporting import (
    TeamLifetimeSummary,
    TeamPicks,
    TeamReport,
    TransactionFilter,
    WaiverReport,
    secondary_metric,
)


def _format_metric(value: float | None, digits: int) -> str:
    return "N/A" if value is None else f"{value:.{digits}f}"


def render_page(body: str, *, title: str = "Draft Ratings Dashboard") -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">
    <title>{escape(title)}</title>
    <script src=\"https://unpkg.com/htmx.org@1.9.6\"></script>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ max-width: 72rem; margin: 0 auto; }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        .card {{ background: #fff; padding: 1.5rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); margin-bottom: 1rem; }}
        .selectors {{ display: flex; gap: 1rem; flex-wrap: wrap; }}
        .selectors label {{ display: flex; flex-direction: column; font-weight: 600; }}
        .selectors select {{ margin-top: 0.35rem; padding: 0.4rem; border-radius: 6px; border: 1px solid #cbd5e1; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
        th, td {{ padding: 0.5rem; border: 1px solid #e2e8f0; text-align: left; }}
        th {{ background: #f8fafc; color: #64748b; font-size: 0.8rem; }}
        button {{ padding: 0.3rem 0.8rem; border-radius: 6px; border: 1px solid #2563eb; background: #fff; color: #2563eb; cursor: pointer; }}
        .muted {{ color: #64748b; }}
        .empty {{ text-align: center; padding: 2rem 0; color: #64748b; }}
        .stats {{ display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; margin-bottom: 1rem; }}
        .stat {{ background: #f8fafc; padding: 1rem; border-radius: 8px; }}
        .stat strong {{ display: block; font-size: 1.5rem; }}
        .badge {{ display: inline-block; padding: 0.1rem 0.6rem; border-radius: 999px; font-size: 0.8rem; font-weight: 600; }}
        .verdict-steal {{ background: #f3e8ff; color: #6b21a8; }}
        .verdict-value {{ background: #dcfce7; color: #166534; }}
        .verdict-fair {{ background: #fef9c3; color: #854d0e; }}
        .verdict-reach {{ background: #fee2e2; color: #991b1b; }}
        .verdict-bust {{ background: #1f2937; color: #fff; }}
        .verdict-none {{ background: #f3f4f6; color: #1f2937; }}
        .filters a, .weeks a {{ display: inline-block; margin-right: 0.5rem; padding: 0.4rem 0.9rem; border-radius: 6px; background: #e2e8f0; color: #0f172a; text-decoration: none; }}
        .filters a.active {{ background: #2563eb; color: #fff; }}
        .weeks {{ margin-top: 0.75rem; }}
        details {{ background: #fff; border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.08); margin-bottom: 0.75rem; }}
        summary {{ padding: 0.75rem 1rem; cursor: pointer; display: flex; justify-content: space-between; }}
        .tx {{ margin: 0 1rem 0.5rem; padding: 0.6rem; border-radius: 6px; background: #f8fafc; }}
        .tx.add {{ background: #ecfdf5; }}
        .tx.drop {{ background: #fef2f2; }}
    </style>
</head>
<body>
    <nav><a href=\"/\">Ratings</a><a href=\"/waiverwire\">Waiver Wire</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _season_selector(seasons: Sequence[int], current: int) -> str:
    options = "".join(
        f"<option value=\"{season}\"{' selected' if season == current else ''}>{season}</option>"
        for season in seasons
    )
    return (
        "<label for=\"season\">Select Season"
        "<select id=\"season\" name=\"season\" hx-get=\"/\" hx-target=\"body\" hx-push-url=\"true\" "
        "hx-include=\"[name='evalMethod'], [name='season']\">"
        f"{options}</select></label>"
    )


def _method_selector(current: EvalMethod) -> str:
    options = "".join(
        f"<option value=\"{method.value}\"{' selected' if method is current else ''}>{escape(method.label)}</option>"
        for method in EvalMethod
    )
    return (
        "<label for=\"evalMethod\">Evaluation Method"
        "<select id=\"evalMethod\" name=\"evalMethod\" hx-get=\"/\" hx-target=\"body\" hx-push-url=\"true\" "
        "hx-include=\"[name='evalMethod'], [name='season']\">"
        f"{options}</select></label>"
    )


def render_dashboard(report: TeamReport, seasons: Sequence[int]) -> str:
    season = report.season
    if report.snapshot_timestamp:
        subtitle = f"{season} Season &bull; Latest Snapshot: {escape(report.snapshot_timestamp)}"
    else:
        subtitle = f"{season} Season &bull; No data available"

    if report.teams:
        rows = "".join(
            f"""
            <tr>
                <td><a href=\"/team/{team.team_id}\">{escape(team.team_name)}</a>
                    <div class=\"muted\">{team.total_picks} picks</div></td>
                <td>{_format_metric(team.average_rating, 2)}</td>
                <td>{_format_metric(secondary_metric(team, report.method), 1)}</td>
                <td><button hx-get=\"/team/{team.team_id}/picks?season={season}\"
                            hx-target=\"#team-picks-content\" hx-swap=\"innerHTML\">View</button></td>
            </tr>
            """
            for team in report.teams
        )
        export_query = urlencode({"season": season, "evalMethod": report.method.value})
        ratings = f"""
        <table>
            <thead><tr><th>Team</th><th>Rating</th><th>{escape(report.method.column)}</th><th></th></tr></thead>
            <tbody>{rows}</tbody>
        </table>
        <p><a href=\"/export/ratings.csv?{export_query}\">Download CSV</a></p>
        """
    else:
        ratings = f"<p class=\"empty\">No draft data available for {season} season</p>"

    body = f"""
    <div class=\"card selectors\">
        {_season_selector(seasons, season)}
        {_method_selector(report.method)}
    </div>
    <div class=\"card\">
        <h1>Draft Ratings Dashboard</h1>
        <p class=\"muted\">{subtitle}</p>
    </div>
    <div class=\"card\">
        <h2>Team Ratings</h2>
        {ratings}
    </div>
    <div class=\"card\" id=\"picks-section\">
        <div id=\"team-picks-content\"><p class=\"muted\">Select a team to view their picks</p></div>
    </div>
    """
    return render_page(body)


def _verdict_badge(label: str) -> str:
    verdict = Verdict.lookup(label) or Verdict.NO_VERDICT
    return f"<span class=\"badge {verdict.badge_style}\">{escape(label)}</span>"


def render_team_picks(result: TeamPicks) -> str:
    """Fragment swapped into the dashboard's picks panel."""

    if not result.picks:
        return (
            "<div class=\"empty\">"
            f"<p>No picks available for this team in {result.season} season</p></div>"
        )
    rows = "".join(
        f"""
        <tr>
            <td>Round {pick.round}.{pick.pick_number}<div class=\"muted\">#{pick.overall_pick} overall</div></td>
            <td>{escape(pick.player_name)}</td>
            <td>{_verdict_badge(pick.verdict)}</td>
            <td>{pick.draft_round_fantasy_per_game_average:.1f} avg fantasy points per game by all picks in round {pick.round}
                <div class=\"muted\">{pick.fantasy_points_per_game:.1f} fantasy points per game by {escape(pick.player_name)}</div></td>
        </tr>
        """
        for pick in result.picks
    )
    return f"""
    <div>
        <h2>{escape(result.team_name or '')}'s {result.season} Picks</h2>
        <table>
            <thead><tr><th>Pick</th><th>Player</th><th>Verdict</th><th>Points</th></tr></thead>
            <tbody>{rows}</tbody>
        </table>
        <p><a href=\"/team/{result.team_id}/picks.csv?season={result.season}\">Download CSV</a></p>
    </div>
    """


def render_team_summary(summary: TeamLifetimeSummary) -> str:
    history = ""
    if not summary.total_picks:
        history = "<p class=\"empty\">No draft history for this team</p>"
    body = f"""
    <div class=\"card\">
        <h1>{escape(summary.team_name)}</h1>
        <div class=\"stats\">
            <div class=\"stat\">Lifetime Draft Rating<strong>{_format_metric(summary.lifetime_rating, 2)}</strong></div>
            <div class=\"stat\">Average PPG per Pick<strong>{_format_metric(summary.lifetime_ppg, 1)}</strong></div>
        </div>
        <div class=\"muted\">
            <div>Total Picks: {summary.total_picks}</div>
            <div>Seasons: {summary.seasons_drafted}</div>
        </div>
        {history}
    </div>
    """
    return render_page(body, title=f"{summary.team_name} - Draft History")


def _waiver_link(week: int, kind: TransactionFilter) -> str:
    params: dict[str, str | int] = {"week": week}
    if kind is not TransactionFilter.ALL:
        params["type"] = kind.value
    return f"/waiverwire?{urlencode(params)}"


def render_waiver_wire(report: WaiverReport) -> str:
    active = ' class="active"'
    filters = "".join(
        f"<a href=\"{_waiver_link(report.week, kind)}\"{active if kind is report.kind else ''}>{label}</a>"
        for kind, label in (
            (TransactionFilter.ALL, "All"),
            (TransactionFilter.ADDS, "Adds"),
            (TransactionFilter.DROPS, "Drops"),
        )
    )

    nav_parts: list[str] = []
    if report.week > 1:
        nav_parts.append(f"<a href=\"{_waiver_link(report.week - 1, report.kind)}\">&larr; Week {report.week - 1}</a>")
    options = "".join(
        f"<option value=\"{_waiver_link(week, report.kind)}\"{' selected' if week == report.week else ''}>Week {week}</option>"
        for week in range(1, max(report.current_week, report.week) + 1)
    )
    nav_parts.append(f"<select onchange=\"window.location.href=this.value\">{options}</select>")
    if report.week < report.current_week:
        nav_parts.append(f"<a href=\"{_waiver_link(report.week + 1, report.kind)}\">Week {report.week + 1} &rarr;</a>")

    if not report.groups:
        groups_html = "<p class=\"empty\">No transactions this week</p>"
    else:
        sections: list[str] = []
        for team_name, transactions in report.groups.items():
            items = "".join(
                f"""
                <div class=\"tx{' add' if tx.is_add else ' drop' if tx.is_drop else ''}\">
                    <strong>{escape(tx.player_info)}</strong>
                    <span class=\"muted\">{escape(tx.transac_date[:10])}</span>
                    <div class=\"muted\">{escape(tx.transac_type)}</div>
                </div>
                """
                for tx in transactions
            )
            plural = "" if len(transactions) == 1 else "s"
            sections.append(
                f"<details><summary><span>{escape(team_name)}</span>"
                f"<span class=\"muted\">{len(transactions)} transaction{plural}</span></summary>{items}</details>"
            )
        groups_html = "".join(sections)

    body = f"""
    <div class=\"card\">
        <div class=\"filters\">{filters}</div>
        <div class=\"weeks\">{''.join(nav_parts)}</div>
    </div>
    <h2>Week {report.week} Transactions</h2>
    <p class=\"muted\">{report.period}</p>
    {groups_html}
    """
    return render_page(body, title="Waiver Wire")
