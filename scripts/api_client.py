"""Lightweight REST client for the draftboard API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


_UPLOAD_ROUTES = {
    "picks": "/seed_draft_ratings",
    "transactions": "/transactions",
    "gp": "/load_gp",
}


def _print_response(resp: httpx.Response) -> None:
    try:
        print(json.dumps(resp.json(), indent=2))
    except json.JSONDecodeError:
        print(resp.text)


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the draftboard REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--upload", choices=sorted(_UPLOAD_ROUTES), help="Kind of JSON batch to post")
    parser.add_argument("payload", type=Path, nargs="?", help="JSON file to post with --upload")
    parser.add_argument("--ratings", type=int, metavar="SEASON", help="Fetch team ratings for a season")
    parser.add_argument("--method", default="average_ppg", help="Evaluation method for --ratings/--export-ratings")
    parser.add_argument("--matching", type=int, metavar="SEASON", help="Fetch games played for drafted players")
    parser.add_argument("--export-ratings", type=int, metavar="SEASON", help="Download the ratings CSV")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.upload and args.payload is None:
        raise SystemExit("a payload file is required with --upload")

    with httpx.Client(base_url=args.base_url) as client:
        if args.upload:
            resp = client.post(
                _UPLOAD_ROUTES[args.upload],
                content=args.payload.read_bytes(),
                headers={"Content-Type": "application/json"},
            )
            _print_response(resp)
            if resp.status_code >= 400:
                raise SystemExit(f"upload rejected with status {resp.status_code}")
        if args.ratings is not None:
            resp = client.get("/api/ratings", params={"season": args.ratings, "evalMethod": args.method})
            resp.raise_for_status()
            _print_response(resp)
        if args.matching is not None:
            resp = client.get(f"/matching-players/{args.matching}")
            resp.raise_for_status()
            _print_response(resp)
        if args.export_ratings is not None:
            resp = client.get(
                "/export/ratings.csv",
                params={"season": args.export_ratings, "evalMethod": args.method},
            )
            resp.raise_for_status()
            if args.export_path:
                args.export_path.write_text(resp.text)
                print(f"CSV export saved to {args.export_path}")
            else:
                print(resp.text)


if __name__ == "__main__":
    main()
