"""Filtering and per-team grouping of waiver-wire transactions."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Iterable

from draftboard.models import TransactionView
from draftboard.reporting.weeks import week_number


logger = logging.getLogger(__name__)

UNKNOWN_TEAM = "Unknown Team"


class TransactionFilter(str, Enum):
    ALL = "all"
    ADDS = "adds"
    DROPS = "drops"

    def matches(self, transaction: TransactionView) -> bool:
        if self is TransactionFilter.ADDS:
            return transaction.is_add
        if self is TransactionFilter.DROPS:
            return transaction.is_drop
        return True


def filter_transactions(
    transactions: Iterable[TransactionView],
    kind: TransactionFilter = TransactionFilter.ALL,
) -> list[TransactionView]:
    return [tx for tx in transactions if kind.matches(tx)]


def transactions_in_week(
    transactions: Iterable[TransactionView],
    week: int,
    league_start: date,
) -> list[TransactionView]:
    """Keep transactions dated inside ``week``; undatable rows never match."""

    selected: list[TransactionView] = []
    for tx in transactions:
        try:
            tx_week = week_number(tx.transac_date, league_start)
        except ValueError:
            logger.debug("Skipping transaction with unparseable date %r", tx.transac_date)
            continue
        if tx_week == week:
            selected.append(tx)
    return selected


def group_by_team(transactions: Iterable[TransactionView]) -> dict[str, list[TransactionView]]:
    """Bucket transactions by resolved team name, keeping each bucket's order.

    Transactions whose team could not be resolved land under ``UNKNOWN_TEAM``.
    Buckets come back sorted by team name with the unknown bucket last.
    """

    groups: dict[str, list[TransactionView]] = {}
    for tx in transactions:
        groups.setdefault(tx.team_name or UNKNOWN_TEAM, []).append(tx)
    ordered = sorted(groups, key=lambda name: (name == UNKNOWN_TEAM, name.lower()))
    return {name: groups[name] for name in ordered}
