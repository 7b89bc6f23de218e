"""Chronological ordering of ledger entries."""

from datetime import date
from typing import Iterable

from exchange_ledger.core.timezone import to_local
from exchange_ledger.domain.models import CurrencyTransaction


def chronological_key(txn: CurrencyTransaction) -> tuple:
    """
    Sort key: date, then created_at.

    A missing created_at sorts ahead of any timestamp on the same date.
    """
    created = txn.created_at
    stamp = to_local(created).timestamp() if created is not None else 0.0
    return (txn.txn_date or date.min, created is not None, stamp)


def order_chronologically(transactions: Iterable[CurrencyTransaction]) -> list[CurrencyTransaction]:
    """Return a new list in ledger order; ties keep input order."""
    return sorted(transactions, key=chronological_key)
