"""Repository layer - read access to the exchange ledger."""

from exchange_ledger.repositories.protocols import ExchangeTransactionRepository

__all__ = [
    "ExchangeTransactionRepository",
]
