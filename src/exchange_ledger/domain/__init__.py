"""Domain layer - pure ledger models with no external dependencies."""

from exchange_ledger.domain.models import (
    Currency,
    CurrencyTransaction,
    ExchangeType,
)

__all__ = [
    "Currency",
    "CurrencyTransaction",
    "ExchangeType",
]
