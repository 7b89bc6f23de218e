"""Enumerations for domain models."""

from enum import Enum
from typing import Optional


class ExchangeType(str, Enum):
    """Types of money-exchange ledger entries."""

    BUY = "Buy"
    SELL = "Sell"
    ADJUSTMENT = "Adjustment"  # Physical-count reconciliation, reserve only

    @classmethod
    def parse(cls, value: object) -> Optional["ExchangeType"]:
        """Case-insensitive lookup; returns None for unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None
