"""Domain models package."""

from exchange_ledger.domain.models.enums import ExchangeType
from exchange_ledger.domain.models.currency import Currency
from exchange_ledger.domain.models.transaction import CurrencyTransaction

__all__ = [
    "ExchangeType",
    "Currency",
    "CurrencyTransaction",
]
