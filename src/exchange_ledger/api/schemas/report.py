"""Pydantic schemas for exchange report endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from exchange_ledger.domain.views import (
    CurrencyReport,
    ExchangeReport,
    ReportSummary,
    ValidationFailure,
)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CurrencyReportResponse(CamelModel):
    """Reserve and profit/loss for one currency; flags present only when raised."""

    currency_code: str
    currency_name: str
    total_bought: float
    total_sold: float
    adjustment_amount: float
    reserve: float
    weighted_average_purchase_price: float
    last_buy_rate: float
    last_sell_rate: float
    current_reserve_value: float
    realized_profit_loss: float
    unrealized_profit_loss: float
    total_purchase_cost: float
    total_sale_revenue: float
    over_sold_quantity: Optional[float] = None
    cost_basis_unavailable: Optional[bool] = None

    @classmethod
    def from_view(cls, row: CurrencyReport) -> "CurrencyReportResponse":
        return cls(
            currency_code=row.currency_code,
            currency_name=row.currency_name,
            total_bought=float(row.total_bought),
            total_sold=float(row.total_sold),
            adjustment_amount=float(row.adjustment_amount),
            reserve=float(row.reserve),
            weighted_average_purchase_price=float(row.weighted_average_purchase_price),
            last_buy_rate=float(row.last_buy_rate),
            last_sell_rate=float(row.last_sell_rate),
            current_reserve_value=float(row.current_reserve_value),
            realized_profit_loss=float(row.realized_profit_loss),
            unrealized_profit_loss=float(row.unrealized_profit_loss),
            total_purchase_cost=float(row.total_purchase_cost),
            total_sale_revenue=float(row.total_sale_revenue),
            over_sold_quantity=float(row.over_sold_quantity) if row.over_sold_quantity > 0 else None,
            cost_basis_unavailable=True if row.cost_basis_unavailable else None,
        )


class ReportSummaryResponse(CamelModel):
    """Portfolio-wide totals."""

    total_currencies: int
    total_realized_profit_loss: float
    total_unrealized_profit_loss: float
    total_purchase_cost: float
    total_sale_revenue: float
    total_current_reserve_value: float

    @classmethod
    def from_view(cls, summary: ReportSummary) -> "ReportSummaryResponse":
        return cls(
            total_currencies=summary.total_currencies,
            total_realized_profit_loss=float(summary.total_realized_profit_loss),
            total_unrealized_profit_loss=float(summary.total_unrealized_profit_loss),
            total_purchase_cost=float(summary.total_purchase_cost),
            total_sale_revenue=float(summary.total_sale_revenue),
            total_current_reserve_value=float(summary.total_current_reserve_value),
        )


class SkippedTransactionResponse(CamelModel):
    """A transaction left out because it was malformed."""

    position: int
    message: str
    txn_id: Optional[str] = None

    @classmethod
    def from_view(cls, failure: ValidationFailure) -> "SkippedTransactionResponse":
        return cls(position=failure.position, message=failure.message, txn_id=failure.txn_id)


class ExchangeReportResponse(CamelModel):
    """Response schema for the dashboard, reserves and ad-hoc report."""

    success: bool = True
    data: list[CurrencyReportResponse]
    summary: ReportSummaryResponse
    skipped: list[SkippedTransactionResponse] = Field(default_factory=list)
    generated_at: Optional[datetime] = None

    @classmethod
    def from_view(cls, report: ExchangeReport) -> "ExchangeReportResponse":
        return cls(
            data=[CurrencyReportResponse.from_view(row) for row in report.currencies],
            summary=ReportSummaryResponse.from_view(report.summary),
            skipped=[SkippedTransactionResponse.from_view(f) for f in report.skipped],
            generated_at=report.generated_at,
        )


class ReportRequest(CamelModel):
    """
    Request schema for an ad-hoc report over supplied transactions.

    Transactions stay loosely typed so malformed entries are skipped one by
    one instead of failing the whole request.
    """

    transactions: list[Any] = Field(default_factory=list)
    currency_code: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    currencies: dict[str, str] = Field(default_factory=dict)
    market_rates: dict[str, Decimal] = Field(default_factory=dict)


class CacheInvalidationResponse(CamelModel):
    """Outcome of a cache invalidation."""

    success: bool = True
    currency_code: Optional[str] = None
    invalidated: int = 0
