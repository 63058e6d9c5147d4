"""Command-line interface for loading data and printing draft reports."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from draftboard.config import Settings, load_settings
from draftboard.export import export_team_report_to_csv
from draftboard.ingest import (
    DraftPicksPayload,
    ParseError,
    PlayerSnapshotsPayload,
    TransactionsPayload,
    parse_payload,
    store_draft_picks,
    store_player_snapshots,
    store_transactions,
)
from draftboard.models import EvalMethod
from draftboard.persistence import DraftStore
from draftboard.reporting import (
    TransactionFilter,
    matching_players,
    secondary_metric,
    team_report,
    waiver_report,
)


_LOADERS = {
    "picks": (DraftPicksPayload, store_draft_picks, "draft picks"),
    "transactions": (TransactionsPayload, store_transactions, "transactions"),
    "gp": (PlayerSnapshotsPayload, store_player_snapshots, "player snapshots"),
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fantasy draft ratings dashboard")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (overrides DRAFTBOARD_DB_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the dashboard web server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    load = commands.add_parser("load", help="Validate and store a JSON batch file")
    load.add_argument("kind", choices=sorted(_LOADERS), help="Which payload the file holds")
    load.add_argument("path", type=Path, help="Path to the JSON payload")

    report = commands.add_parser("report", help="Print team ratings for a season")
    report.add_argument("--season", type=int, default=None)
    report.add_argument(
        "--method",
        choices=[method.value for method in EvalMethod],
        default=EvalMethod.AVERAGE_PPG.value,
        help="Secondary metric to show beside the rating",
    )
    report.add_argument("--output", type=Path, default=None, help="Write the table as CSV instead of printing")

    waiver = commands.add_parser("waiver", help="Print one league week of transactions")
    waiver.add_argument("--week", type=int, default=None)
    waiver.add_argument(
        "--type",
        dest="kind",
        choices=[kind.value for kind in TransactionFilter],
        default=TransactionFilter.ALL.value,
    )

    match = commands.add_parser("match", help="Print games played for each drafted player")
    match.add_argument("--season", type=int, default=None)
    return parser.parse_args(argv)


def _load(store: DraftStore, kind: str, path: Path) -> None:
    model, writer, noun = _LOADERS[kind]
    result = parse_payload(model, path.read_bytes())
    if isinstance(result, ParseError):
        print(f"{path}: {result.message}")
        if result.detail:
            print(f"  {result.detail}")
        for violation in result.violations:
            print(f"  {violation.path}: {violation.message}")
        raise SystemExit(1)
    count = writer(store, result.value)
    print(f"Stored {count} {noun} from {path}")


def _print_report(store: DraftStore, settings: Settings, season: int | None, method: str, output: Path | None) -> None:
    report = team_report(store, season if season is not None else settings.default_season, EvalMethod(method))
    if output is not None:
        output.write_text(export_team_report_to_csv(report), encoding="utf-8")
        print(f"Wrote {len(report.teams)} teams to {output}")
        return
    if report.snapshot_timestamp is None:
        print(f"No draft data available for {report.season} season")
        return
    print(f"{report.season} season, snapshot {report.snapshot_timestamp}")
    print(f"{'Team':<30} {'Picks':>5} {'Rating':>6} {report.method.column:>13}")
    for team in report.teams:
        rating = "N/A" if team.average_rating is None else f"{team.average_rating:.2f}"
        metric = secondary_metric(team, report.method)
        metric_text = "N/A" if metric is None else f"{metric:.1f}"
        print(f"{team.team_name[:30]:<30} {team.total_picks:>5} {rating:>6} {metric_text:>13}")


def _print_waiver(store: DraftStore, settings: Settings, week: int | None, kind: str) -> None:
    report = waiver_report(store, league_start=settings.league_start, week=week, kind=TransactionFilter(kind))
    print(f"Week {report.week} ({report.period}): {report.total} transactions")
    for team_name, transactions in report.groups.items():
        print(f"{team_name} ({len(transactions)})")
        for tx in transactions:
            print(f"  {tx.transac_date[:10]}  {tx.transac_type:<12} {tx.player_info}")


def _print_matches(store: DraftStore, settings: Settings, season: int | None) -> None:
    report = matching_players(store, season if season is not None else settings.default_season)
    if report.snapshot_date is None:
        print("No player snapshots loaded; games played default to 0")
    for match in report.matches:
        print(f"{match.draft_id:>8}  {match.draft_name:<30} {match.gp:>3}")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.db is not None:
        settings = replace(settings, db_path=args.db)

    if args.command == "serve":
        import uvicorn

        from draftboard.api import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return

    store = DraftStore(settings.db_path)
    if args.command == "load":
        _load(store, args.kind, args.path)
    elif args.command == "report":
        _print_report(store, settings, args.season, args.method, args.output)
    elif args.command == "waiver":
        _print_waiver(store, settings, args.week, args.kind)
    elif args.command == "match":
        _print_matches(store, settings, args.season)


if __name__ == "__main__":
    main()
