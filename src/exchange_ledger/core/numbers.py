"""Decimal helpers shared by the ledger computations."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from exchange_ledger.core.exceptions import ValidationError

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a number-like value to Decimal.

    Floats go through str() so 110.1 stays 110.1 rather than its binary
    expansion. Raises ValidationError for anything non-numeric or non-finite.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"Not a number: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Not a finite number: {value!r}")
    return result


def _quantize(value: Decimal, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    result = value.quantize(exponent, rounding=ROUND_HALF_UP)
    # Avoid reporting -0.00
    return result if result else abs(result)


def quantize_money(value: Decimal, places: int = 2) -> Decimal:
    """Round a BDT amount for reporting."""
    return _quantize(value, places)


def quantize_rate(value: Decimal, places: int = 4) -> Decimal:
    """Round a BDT-per-unit rate for reporting."""
    return _quantize(value, places)
