"""Input adapters that validate and persist incoming record batches."""

from .batches import store_draft_picks, store_player_snapshots, store_transactions
from .payloads import (
    FieldViolation,
    ParseError,
    ParseOk,
    ParseResult,
    parse_payload,
    validate_payload,
)
from .schemas import DraftPicksPayload, PlayerSnapshotsPayload, TransactionsPayload

__all__ = [
    "DraftPicksPayload",
    "PlayerSnapshotsPayload",
    "TransactionsPayload",
    "FieldViolation",
    "ParseError",
    "ParseOk",
    "ParseResult",
    "parse_payload",
    "validate_payload",
    "store_draft_picks",
    "store_player_snapshots",
    "store_transactions",
]
