"""Report assembly: filters, per-currency rows and portfolio totals."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from exchange_ledger.core.exceptions import ValidationError
from exchange_ledger.core.numbers import quantize_money, quantize_rate
from exchange_ledger.core.timezone import now_local
from exchange_ledger.domain.models import Currency, CurrencyTransaction
from exchange_ledger.domain.views import (
    CurrencyReport,
    ExchangeReport,
    ReportSummary,
    ValidationFailure,
)
from exchange_ledger.services.ordering import order_chronologically
from exchange_ledger.services.profit_loss import CurrencyPosition, ProfitLossCalculator
from exchange_ledger.services.validation import TransactionValidator

logger = logging.getLogger(__name__)

CurrencyNames = Union[Mapping[str, str], Iterable[Currency], None]


@dataclass(frozen=True)
class ReportFilter:
    """
    Caller-supplied report window.

    The date range bounds the fold itself: reserve and WAC are recomputed
    as if only entries inside [from_date, to_date] existed.
    """

    currency_code: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    def __post_init__(self) -> None:
        code = (self.currency_code or "").strip().upper() or None
        object.__setattr__(self, "currency_code", code)
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValidationError(
                f"fromDate {self.from_date.isoformat()} is after toDate {self.to_date.isoformat()}"
            )

    def includes(self, txn: CurrencyTransaction) -> bool:
        if self.currency_code and txn.currency_code != self.currency_code:
            return False
        if self.from_date and txn.txn_date < self.from_date:
            return False
        if self.to_date and txn.txn_date > self.to_date:
            return False
        return True


def _name_lookup(currencies: CurrencyNames) -> dict[str, str]:
    if currencies is None:
        return {}
    if isinstance(currencies, Mapping):
        return {code.strip().upper(): name for code, name in currencies.items()}
    return {c.code: c.name for c in currencies}


class ReportAssembler:
    """
    Builds the exchange report from a raw transaction list.

    Inactive entries are dropped, malformed ones are skipped and listed,
    and each remaining currency is replayed in ledger order.
    """

    def __init__(
        self,
        calculator: Optional[ProfitLossCalculator] = None,
        validator: Optional[TransactionValidator] = None,
        money_places: int = 2,
        rate_places: int = 4,
    ):
        self._calculator = calculator or ProfitLossCalculator()
        self._validator = validator or TransactionValidator()
        self._money_places = money_places
        self._rate_places = rate_places

    def assemble(
        self,
        transactions: Iterable[CurrencyTransaction],
        report_filter: Optional[ReportFilter] = None,
        currencies: CurrencyNames = None,
        market_rates: Optional[Mapping[str, Decimal]] = None,
        skipped: Optional[list[ValidationFailure]] = None,
    ) -> ExchangeReport:
        """
        Produce the report.

        Args:
            transactions: Ledger entries in any order; never mutated
            report_filter: Currency and date window
            currencies: Display names, as {code: name} or Currency objects
            market_rates: Valuation rate per currency, overriding last sell rate
            skipped: Failures found earlier (e.g. while parsing raw records)
        """
        report_filter = report_filter or ReportFilter()
        names = _name_lookup(currencies)
        rates = {code.strip().upper(): rate for code, rate in (market_rates or {}).items()}

        valid, failures = self._validator.validate(transactions)

        grouped: dict[str, list[CurrencyTransaction]] = defaultdict(list)
        for txn in valid:
            if report_filter.includes(txn):
                grouped[txn.currency_code].append(txn)

        if report_filter.currency_code and report_filter.currency_code not in grouped:
            grouped[report_filter.currency_code] = []

        rows: list[CurrencyReport] = []
        for code in sorted(grouped):
            entries = order_chronologically(grouped[code])
            position = self._calculator.calculate(code, entries, market_rate=rates.get(code))
            rows.append(self._to_row(position, self._resolve_name(code, entries, names)))

        logger.debug(
            "Assembled exchange report: %d currencies, %d skipped",
            len(rows),
            len(failures) + len(skipped or []),
        )
        return ExchangeReport(
            currencies=rows,
            summary=self.summarize(rows),
            skipped=list(skipped or []) + failures,
            generated_at=now_local(),
        )

    def summarize(self, rows: list[CurrencyReport]) -> ReportSummary:
        """Sum the already-rounded per-currency figures."""
        summary = ReportSummary(total_currencies=len(rows))
        for row in rows:
            summary.total_realized_profit_loss += row.realized_profit_loss
            summary.total_unrealized_profit_loss += row.unrealized_profit_loss
            summary.total_purchase_cost += row.total_purchase_cost
            summary.total_sale_revenue += row.total_sale_revenue
            summary.total_current_reserve_value += row.current_reserve_value
        return summary

    @staticmethod
    def _resolve_name(
        code: str,
        entries: list[CurrencyTransaction],
        names: dict[str, str],
    ) -> str:
        if names.get(code):
            return names[code]
        for txn in reversed(entries):
            if txn.currency_name:
                return txn.currency_name
        return code

    def _to_row(self, position: CurrencyPosition, name: str) -> CurrencyReport:
        reserve = position.reserve
        pnl = position.profit_loss

        def money(value: Decimal) -> Decimal:
            return quantize_money(value, self._money_places)

        def rate(value: Decimal) -> Decimal:
            return quantize_rate(value, self._rate_places)

        return CurrencyReport(
            currency_code=reserve.currency_code,
            currency_name=name,
            total_bought=reserve.total_bought,
            total_sold=reserve.total_sold,
            adjustment_amount=reserve.adjustment_amount,
            reserve=reserve.reserve,
            weighted_average_purchase_price=rate(reserve.weighted_average_purchase_price),
            last_buy_rate=rate(reserve.last_buy_rate),
            last_sell_rate=rate(reserve.last_sell_rate),
            current_reserve_value=money(reserve.current_reserve_value),
            realized_profit_loss=money(pnl.realized_profit_loss),
            unrealized_profit_loss=money(pnl.unrealized_profit_loss),
            total_purchase_cost=money(pnl.total_purchase_cost),
            total_sale_revenue=money(pnl.total_sale_revenue),
            over_sold_quantity=pnl.over_sold_quantity,
            cost_basis_unavailable=pnl.cost_basis_unavailable,
        )
