"""Per-transaction validation for the reserve fold."""

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from exchange_ledger.core.exceptions import ValidationError
from exchange_ledger.core.numbers import to_decimal
from exchange_ledger.core.timezone import parse_date, parse_datetime_local
from exchange_ledger.domain.models import CurrencyTransaction, ExchangeType
from exchange_ledger.domain.views import ValidationFailure

logger = logging.getLogger(__name__)


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-None value among keys."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return to_decimal(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_active(value: Any) -> bool:
    # Missing flag means active, as in the exchange store
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no")
    return bool(value)


def parse_record(record: Mapping[str, Any], position: int = 0) -> CurrencyTransaction:
    """
    Build a CurrencyTransaction from a raw mapping.

    Accepts snake_case keys as well as the exchange store's camelCase ones
    (currencyCode, exchangeRate, amount_bdt, createdAt, isActive).
    Raises ValidationError for unparseable numbers or dates.
    """
    txn_id = _optional_str(_pick(record, "txn_id", "id", "_id")) or f"#{position}"
    raw_date = _pick(record, "txn_date", "date")
    raw_created = _pick(record, "created_at", "createdAt")

    return CurrencyTransaction(
        txn_id=txn_id,
        currency_code=_optional_str(_pick(record, "currency_code", "currencyCode")),
        txn_type=_pick(record, "txn_type", "type"),
        quantity=_optional_decimal(_pick(record, "quantity")),
        exchange_rate=_optional_decimal(_pick(record, "exchange_rate", "exchangeRate")) or Decimal("0"),
        amount_bdt=_optional_decimal(_pick(record, "amount_bdt", "amountBDT", "amountBdt")),
        txn_date=parse_date(raw_date) if raw_date not in (None, "") else None,
        created_at=parse_datetime_local(raw_created) if raw_created not in (None, "") else None,
        is_active=_parse_active(_pick(record, "is_active", "isActive")),
        currency_name=_optional_str(_pick(record, "currency_name", "currencyName")),
        full_name=_optional_str(_pick(record, "full_name", "fullName")),
        mobile_number=_optional_str(_pick(record, "mobile_number", "mobileNumber")),
        dealer_id=_optional_str(_pick(record, "dealer_id", "dilarId", "selectedDilarId")),
    )


class TransactionValidator:
    """
    Screens transactions before they enter the fold.

    Malformed entries are reported as ValidationFailure and left out;
    nothing here raises for bad data.
    """

    def check(self, txn: CurrencyTransaction) -> Optional[str]:
        """Return a failure message, or None if the transaction is usable."""
        if not txn.currency_code:
            return "Currency code is required"
        if not isinstance(txn.txn_type, ExchangeType):
            return f"Unknown transaction type: {txn.txn_type!r}"
        if txn.txn_date is None:
            return "Date is required"
        if txn.quantity is None:
            return f"{txn.txn_type.value} requires a quantity"

        if txn.txn_type == ExchangeType.ADJUSTMENT:
            if txn.quantity == 0:
                return "Adjustment requires a non-zero quantity"
            return None

        if txn.quantity <= 0:
            return f"{txn.txn_type.value} requires quantity > 0"
        if txn.exchange_rate < 0:
            return f"{txn.txn_type.value} requires exchange rate >= 0"
        if txn.amount_bdt is not None and txn.amount_bdt < 0:
            return "BDT amount cannot be negative"
        return None

    def validate(
        self,
        transactions: Iterable[CurrencyTransaction],
    ) -> tuple[list[CurrencyTransaction], list[ValidationFailure]]:
        """
        Split active transactions into usable ones and recorded failures.

        Inactive (cancelled) entries are dropped without a failure.
        Failure positions index into the given sequence.
        """
        valid: list[CurrencyTransaction] = []
        failures: list[ValidationFailure] = []

        for position, txn in enumerate(transactions):
            if not txn.is_active:
                continue
            failure = self._screen(txn, position)
            if failure is None:
                valid.append(txn)
            else:
                failures.append(failure)

        return valid, failures

    def parse_records(
        self,
        records: Iterable[Any],
    ) -> tuple[list[CurrencyTransaction], list[ValidationFailure]]:
        """
        Parse and validate raw mappings in one pass.

        Records that cannot be parsed and records that fail check() both
        become failures, positioned by their index in records. Entries that
        are not mappings at all (null, numbers, lists) fail the same way.
        """
        valid: list[CurrencyTransaction] = []
        failures: list[ValidationFailure] = []

        for position, record in enumerate(records):
            if not isinstance(record, Mapping):
                message = f"Not a transaction record: {type(record).__name__}"
                logger.warning("Skipping record at %d: %s", position, message)
                failures.append(ValidationFailure(position=position, message=message))
                continue
            try:
                txn = parse_record(record, position)
            except ValidationError as exc:
                txn_id = _optional_str(_pick(record, "txn_id", "id", "_id"))
                logger.warning("Skipping unparseable record at %d: %s", position, exc.message)
                failures.append(ValidationFailure(position=position, message=exc.message, txn_id=txn_id))
                continue
            if not txn.is_active:
                continue
            failure = self._screen(txn, position)
            if failure is None:
                valid.append(txn)
            else:
                failures.append(failure)

        return valid, failures

    def _screen(self, txn: CurrencyTransaction, position: int) -> Optional[ValidationFailure]:
        message = self.check(txn)
        if message is None:
            return None
        logger.warning("Skipping transaction %s: %s", txn.txn_id, message)
        return ValidationFailure(position=position, message=message, txn_id=txn.txn_id)
