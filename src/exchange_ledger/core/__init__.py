"""Core utilities and shared functionality."""

from exchange_ledger.core.timezone import (
    now_local,
    now_local_naive,
    to_local,
    parse_date,
    parse_datetime_local,
    LOCAL_TZ,
)
from exchange_ledger.core.exceptions import (
    AppError,
    ValidationError,
)
from exchange_ledger.core.numbers import (
    ZERO,
    to_decimal,
    quantize_money,
    quantize_rate,
)

__all__ = [
    "now_local",
    "now_local_naive",
    "to_local",
    "parse_date",
    "parse_datetime_local",
    "LOCAL_TZ",
    "AppError",
    "ValidationError",
    "ZERO",
    "to_decimal",
    "quantize_money",
    "quantize_rate",
]
