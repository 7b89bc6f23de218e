"""Reserve aggregation: fold a currency's ledger into quantities held."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from exchange_ledger.domain.models import CurrencyTransaction, ExchangeType


@dataclass
class ReserveStep:
    """Reserve level around a single ledger entry."""

    txn_id: str
    reserve_before: Decimal
    reserve_after: Decimal


@dataclass
class ReserveTotals:
    """Cumulative quantities for one currency after a fold."""

    currency_code: str
    total_bought: Decimal = field(default_factory=lambda: Decimal("0"))
    total_sold: Decimal = field(default_factory=lambda: Decimal("0"))
    adjustment_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    reserve: Decimal = field(default_factory=lambda: Decimal("0"))
    last_buy_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    last_sell_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    steps: list[ReserveStep] = field(default_factory=list)


class ReserveAggregator:
    """
    Running reserve for one currency.

    Feed entries in chronological order. A sell is applied even when it
    drives the reserve below zero; the negative balance is reported, not
    rejected, because it reflects inconsistent data upstream.
    """

    def __init__(self, currency_code: str):
        self._totals = ReserveTotals(currency_code=currency_code)

    @property
    def totals(self) -> ReserveTotals:
        return self._totals

    @property
    def reserve(self) -> Decimal:
        return self._totals.reserve

    def apply(self, txn: CurrencyTransaction) -> ReserveStep:
        """Apply one validated, active entry and return the reserve step."""
        totals = self._totals
        quantity = txn.quantity or Decimal("0")
        before = totals.reserve

        if txn.txn_type == ExchangeType.BUY:
            totals.total_bought += quantity
            totals.reserve += quantity
            if txn.exchange_rate > 0:
                totals.last_buy_rate = txn.exchange_rate

        elif txn.txn_type == ExchangeType.SELL:
            totals.total_sold += quantity
            totals.reserve -= quantity
            if txn.exchange_rate > 0:
                totals.last_sell_rate = txn.exchange_rate

        elif txn.txn_type == ExchangeType.ADJUSTMENT:
            totals.adjustment_amount += quantity
            totals.reserve += quantity

        step = ReserveStep(txn_id=txn.txn_id, reserve_before=before, reserve_after=totals.reserve)
        totals.steps.append(step)
        return step

    @classmethod
    def fold(cls, currency_code: str, transactions: Iterable[CurrencyTransaction]) -> ReserveTotals:
        """Fold an ordered sequence of entries into totals."""
        aggregator = cls(currency_code)
        for txn in transactions:
            aggregator.apply(txn)
        return aggregator.totals
