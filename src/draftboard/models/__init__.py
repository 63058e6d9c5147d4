"""Canonical records shared across ingestion, persistence, and reporting."""

from .draft import DraftPick, DraftRatingRecord, EvalMethod, Verdict
from .player import STAT_COLUMNS, PlayerSnapshot, PlayerSnapshotRecord
from .transaction import Transaction, TransactionRecord, TransactionView

__all__ = [
    "DraftPick",
    "DraftRatingRecord",
    "EvalMethod",
    "Verdict",
    "PlayerSnapshot",
    "PlayerSnapshotRecord",
    "STAT_COLUMNS",
    "Transaction",
    "TransactionRecord",
    "TransactionView",
]
