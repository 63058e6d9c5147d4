"""Batch payload shapes accepted by the ingestion endpoints."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from draftboard.models import DraftPick, PlayerSnapshot, Transaction


class DraftPicksPayload(BaseModel):
    snapshot_timestamp: str = Field(..., min_length=1)
    allpicks: List[DraftPick] = Field(..., min_length=1)


class TransactionsPayload(BaseModel):
    snapshot_date: str
    transactions: List[Transaction]


class PlayerSnapshotsPayload(BaseModel):
    snapshot_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    player_info: List[PlayerSnapshot] = Field(..., min_length=1)
