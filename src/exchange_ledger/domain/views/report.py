"""View models for reserve and profit/loss outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


def _zero() -> Decimal:
    return Decimal("0")


@dataclass
class CurrencyReserve:
    """
    Derived reserve snapshot for one currency.

    Recomputed from the ledger on every request; never persisted.
    """

    currency_code: str
    total_bought: Decimal = field(default_factory=_zero)
    total_sold: Decimal = field(default_factory=_zero)
    adjustment_amount: Decimal = field(default_factory=_zero)
    reserve: Decimal = field(default_factory=_zero)
    weighted_average_purchase_price: Decimal = field(default_factory=_zero)
    last_buy_rate: Decimal = field(default_factory=_zero)
    last_sell_rate: Decimal = field(default_factory=_zero)
    current_reserve_value: Decimal = field(default_factory=_zero)

    @property
    def is_negative(self) -> bool:
        """Sells exceeded buys plus adjustments (upstream data problem)."""
        return self.reserve < 0


@dataclass
class ProfitLossEntry:
    """Profit/loss figures for one currency, in BDT."""

    currency_code: str
    realized_profit_loss: Decimal = field(default_factory=_zero)
    unrealized_profit_loss: Decimal = field(default_factory=_zero)
    total_purchase_cost: Decimal = field(default_factory=_zero)
    total_sale_revenue: Decimal = field(default_factory=_zero)
    over_sold_quantity: Decimal = field(default_factory=_zero)
    cost_basis_unavailable: bool = False


@dataclass
class CurrencyReport:
    """One reported row: reserve and P/L merged, rounded for display."""

    currency_code: str
    currency_name: str
    total_bought: Decimal
    total_sold: Decimal
    adjustment_amount: Decimal
    reserve: Decimal
    weighted_average_purchase_price: Decimal
    last_buy_rate: Decimal
    last_sell_rate: Decimal
    current_reserve_value: Decimal
    realized_profit_loss: Decimal
    unrealized_profit_loss: Decimal
    total_purchase_cost: Decimal
    total_sale_revenue: Decimal
    over_sold_quantity: Decimal = field(default_factory=_zero)
    cost_basis_unavailable: bool = False


@dataclass
class ReportSummary:
    """Portfolio-wide totals across the reported currencies."""

    total_currencies: int = 0
    total_realized_profit_loss: Decimal = field(default_factory=_zero)
    total_unrealized_profit_loss: Decimal = field(default_factory=_zero)
    total_purchase_cost: Decimal = field(default_factory=_zero)
    total_sale_revenue: Decimal = field(default_factory=_zero)
    total_current_reserve_value: Decimal = field(default_factory=_zero)


@dataclass
class ValidationFailure:
    """A transaction left out of the fold because it was malformed."""

    position: int
    message: str
    txn_id: Optional[str] = None


@dataclass
class ExchangeReport:
    """Full report: per-currency rows, summary and skipped transactions."""

    currencies: list[CurrencyReport] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=ReportSummary)
    skipped: list[ValidationFailure] = field(default_factory=list)
    generated_at: Optional[datetime] = None
