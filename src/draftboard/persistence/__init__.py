"""SQLite persistence for draft ratings, transactions, and player snapshots."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from draftboard.models import (
    STAT_COLUMNS,
    DraftPick,
    DraftRatingRecord,
    PlayerSnapshot,
    PlayerSnapshotRecord,
    Transaction,
    TransactionView,
)


logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the database cannot be opened, read, or written."""


_DRAFT_COLUMNS = (
    "snapshot_timestamp",
    "pick_number",
    "round",
    "overall_pick",
    "player_id",
    "season",
    "verdict",
    "draft_round_fantasy_per_game_average",
    "fantasy_points_per_game",
    "player_name",
    "team_name",
    "team_id",
)

_TRANSACTION_COLUMNS = (
    "transac_team",
    "transac_date",
    "transac_type",
    "player_info",
    "related_transaction",
    "transaction_group_id",
    "snapshot_date",
)

_SNAPSHOT_COLUMNS = (
    "snapshot_date",
    "player_id",
    "player_name",
    "team_id",
    "team_abbreviation",
    *STAT_COLUMNS,
)

# Everything except the (snapshot_date, player_id) key is overwritten on re-ingest.
_SNAPSHOT_UPDATE_COLUMNS = tuple(
    column for column in _SNAPSHOT_COLUMNS if column not in {"snapshot_date", "player_id"}
)


def _placeholders(columns: tuple[str, ...]) -> str:
    return ", ".join("?" for _ in columns)


class DraftStore:
    """SQLite-backed store for the dashboard's three record types."""

    def __init__(self, db_path: Path | str):
        self._use_uri = isinstance(db_path, str) and db_path.startswith("file:")
        self.db_path: Path | str = db_path if self._use_uri else Path(db_path)
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection whose work commits on success and rolls back on error."""

        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open database {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS draft_ratings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                snapshot_timestamp TEXT NOT NULL,
                pick_number INTEGER NOT NULL,
                round INTEGER NOT NULL,
                overall_pick INTEGER NOT NULL,
                player_id INTEGER NOT NULL,
                season INTEGER NOT NULL,
                verdict TEXT NOT NULL,
                draft_round_fantasy_per_game_average REAL NOT NULL,
                fantasy_points_per_game REAL NOT NULL,
                player_name TEXT NOT NULL,
                team_name TEXT NOT NULL,
                team_id INTEGER NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_draft_ratings_season_snapshot
            ON draft_ratings (season, snapshot_timestamp)
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                transac_team TEXT,
                transac_date TEXT NOT NULL,
                transac_type TEXT NOT NULL,
                player_info TEXT NOT NULL,
                related_transaction INTEGER NOT NULL DEFAULT 0,
                transaction_group_id TEXT,
                snapshot_date TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS player_snapshots (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                snapshot_date TEXT NOT NULL,
                player_id INTEGER NOT NULL,
                player_name TEXT NOT NULL,
                team_id INTEGER,
                team_abbreviation TEXT,
                age REAL,
                gp INTEGER,
                min REAL,
                pts REAL,
                fgm REAL,
                fga REAL,
                fg_pct REAL,
                fg3m REAL,
                fg3a REAL,
                fg3_pct REAL,
                ftm REAL,
                fta REAL,
                ft_pct REAL,
                reb REAL,
                ast REAL,
                stl REAL,
                blk REAL,
                tov REAL,
                UNIQUE (snapshot_date, player_id)
            )
            """
        )

    # -- writes ---------------------------------------------------------------

    def insert_draft_picks(self, *, snapshot_timestamp: str, picks: Iterable[DraftPick]) -> int:
        """Append one snapshot's picks in a single transaction."""

        rows = [
            (
                snapshot_timestamp,
                pick.pick_number,
                pick.round,
                pick.overall_pick,
                pick.player_id,
                pick.season,
                pick.verdict,
                pick.draft_round_fantasy_per_game_average,
                pick.fantasy_points_per_game,
                pick.player_name,
                pick.team_name,
                pick.team_id,
            )
            for pick in picks
        ]
        with self._connect() as conn:
            conn.executemany(
                f"INSERT INTO draft_ratings ({', '.join(_DRAFT_COLUMNS)}) "
                f"VALUES ({_placeholders(_DRAFT_COLUMNS)})",
                rows,
            )
        logger.info("Stored %d draft picks for snapshot %s", len(rows), snapshot_timestamp)
        return len(rows)

    def insert_transactions(self, *, snapshot_date: str, transactions: Iterable[Transaction]) -> int:
        rows = [
            (
                tx.transac_team,
                tx.transac_date,
                tx.transac_type,
                tx.player_info,
                1 if tx.related_transaction else 0,
                tx.transaction_group_id,
                snapshot_date,
            )
            for tx in transactions
        ]
        with self._connect() as conn:
            conn.executemany(
                f"INSERT INTO transactions ({', '.join(_TRANSACTION_COLUMNS)}) "
                f"VALUES ({_placeholders(_TRANSACTION_COLUMNS)})",
                rows,
            )
        logger.info("Stored %d transactions for snapshot %s", len(rows), snapshot_date)
        return len(rows)

    def upsert_player_snapshots(self, *, snapshot_date: str, players: Iterable[PlayerSnapshot]) -> int:
        """Insert or overwrite each player's line for ``snapshot_date``."""

        assignments = ", ".join(f"{column} = excluded.{column}" for column in _SNAPSHOT_UPDATE_COLUMNS)
        statement = (
            f"INSERT INTO player_snapshots ({', '.join(_SNAPSHOT_COLUMNS)}) "
            f"VALUES ({_placeholders(_SNAPSHOT_COLUMNS)}) "
            f"ON CONFLICT(snapshot_date, player_id) DO UPDATE SET {assignments}"
        )
        count = 0
        with self._connect() as conn:
            for player in players:
                values = player.model_dump()
                conn.execute(
                    statement,
                    (snapshot_date, *(values[column] for column in _SNAPSHOT_COLUMNS[1:])),
                )
                count += 1
        logger.info("Upserted %d player snapshots for %s", count, snapshot_date)
        return count

    # -- snapshot resolution --------------------------------------------------

    def latest_snapshot(self, season: int) -> Optional[str]:
        """Newest snapshot timestamp for ``season``, or ``None`` without data."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT MAX(snapshot_timestamp) AS latest FROM draft_ratings WHERE season = ?",
                (season,),
            ).fetchone()
        return row["latest"] if row is not None else None

    def latest_snapshots(self) -> dict[int, str]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT season, MAX(snapshot_timestamp) AS latest
                FROM draft_ratings
                GROUP BY season
                ORDER BY season
                """
            ).fetchall()
        return {row["season"]: row["latest"] for row in rows}

    def latest_overall_snapshot(self) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT MAX(snapshot_timestamp) AS latest FROM draft_ratings").fetchone()
        return row["latest"] if row is not None else None

    # -- reads ----------------------------------------------------------------

    def list_draft_ratings(
        self,
        *,
        season: int,
        snapshot_timestamp: str,
        team_id: int | None = None,
    ) -> List[DraftRatingRecord]:
        query = "SELECT * FROM draft_ratings WHERE season = ? AND snapshot_timestamp = ?"
        params: list[int | str] = [season, snapshot_timestamp]
        if team_id is not None:
            query += " AND team_id = ?"
            params.append(team_id)
        query += " ORDER BY overall_pick ASC, id ASC"
        with self._connect() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_draft(row) for row in rows]

    def list_latest_team_ratings(self, team_id: int) -> List[DraftRatingRecord]:
        """A team's picks from the newest snapshot of every season it appears in."""

        latest = self.latest_snapshots()
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT *
                FROM draft_ratings
                WHERE team_id = ?
                ORDER BY season ASC, overall_pick ASC, id ASC
                """,
                (team_id,),
            ).fetchall()
        return [
            self._row_to_draft(row)
            for row in rows
            if row["snapshot_timestamp"] == latest.get(row["season"])
        ]

    def list_draft_players(self, season: int) -> List[tuple[str, int]]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT player_name, player_id
                FROM draft_ratings
                WHERE season = ?
                ORDER BY overall_pick ASC, id ASC
                """,
                (season,),
            ).fetchall()
        return [(row["player_name"], row["player_id"]) for row in rows]

    def list_transaction_views(self) -> List[TransactionView]:
        """All transactions with team names from the newest ratings snapshot.

        ``transac_team`` must equal the team id's text exactly; anything else
        leaves ``team_name`` empty. Ordered by team name, then most recent
        first within a team.
        """

        latest = self.latest_overall_snapshot()
        with self._connect() as conn:
            rows = conn.execute(
                """
                WITH latest_teams AS (
                    SELECT team_id, MAX(team_name) AS team_name
                    FROM draft_ratings
                    WHERE snapshot_timestamp = ?
                    GROUP BY team_id
                )
                SELECT t.*, d.team_name AS team_name
                FROM transactions t
                LEFT JOIN latest_teams d
                  ON t.transac_team = CAST(d.team_id AS TEXT)
                ORDER BY d.team_name ASC, t.transac_date DESC, t.id ASC
                """,
                (latest,),
            ).fetchall()
        return [self._row_to_transaction(row) for row in rows]

    def latest_player_snapshot_date(self) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT MAX(snapshot_date) AS latest FROM player_snapshots").fetchone()
        return row["latest"] if row is not None else None

    def list_player_snapshots(self, snapshot_date: str | None = None) -> List[PlayerSnapshotRecord]:
        """Snapshot rows for ``snapshot_date``, defaulting to the newest date."""

        snapshot_date = snapshot_date or self.latest_player_snapshot_date()
        if snapshot_date is None:
            return []
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM player_snapshots WHERE snapshot_date = ? ORDER BY id ASC",
                (snapshot_date,),
            ).fetchall()
        return [PlayerSnapshotRecord.model_validate(dict(row)) for row in rows]

    def _row_to_draft(self, row: sqlite3.Row) -> DraftRatingRecord:
        return DraftRatingRecord.model_validate({column: row[column] for column in _DRAFT_COLUMNS})

    def _row_to_transaction(self, row: sqlite3.Row) -> TransactionView:
        data = dict(row)
        data["related_transaction"] = bool(data["related_transaction"])
        return TransactionView.model_validate(data)
