"""Repository protocol definitions (interfaces)."""

from exchange_ledger.repositories.protocols.transaction_repo import ExchangeTransactionRepository

__all__ = [
    "ExchangeTransactionRepository",
]
