"""Persist validated payloads as single batches."""

from __future__ import annotations

from draftboard.ingest.schemas import (
    DraftPicksPayload,
    PlayerSnapshotsPayload,
    TransactionsPayload,
)
from draftboard.persistence import DraftStore


def store_draft_picks(store: DraftStore, payload: DraftPicksPayload) -> int:
    return store.insert_draft_picks(
        snapshot_timestamp=payload.snapshot_timestamp,
        picks=payload.allpicks,
    )


def store_transactions(store: DraftStore, payload: TransactionsPayload) -> int:
    return store.insert_transactions(
        snapshot_date=payload.snapshot_date,
        transactions=payload.transactions,
    )


def store_player_snapshots(store: DraftStore, payload: PlayerSnapshotsPayload) -> int:
    return store.upsert_player_snapshots(
        snapshot_date=payload.snapshot_date,
        players=payload.player_info,
    )
