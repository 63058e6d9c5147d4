"""Roster transaction records."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.config import ConfigDict


class Transaction(BaseModel):
    transac_team: str | None = None
    transac_date: str
    transac_type: str
    player_info: str
    related_transaction: bool
    transaction_group_id: str | None = None

    model_config = ConfigDict(frozen=True)


class TransactionRecord(Transaction):
    snapshot_date: str


class TransactionView(TransactionRecord):
    """Transaction joined to the team name from the latest ratings snapshot.

    ``team_name`` is ``None`` when ``transac_team`` matched no team.
    """

    team_name: str | None = None

    @property
    def is_add(self) -> bool:
        return self.transac_type.endswith("ADDED")

    @property
    def is_drop(self) -> bool:
        return self.transac_type == "DROPPED"
