"""View models for engine outputs."""

from exchange_ledger.domain.views.report import (
    CurrencyReserve,
    ProfitLossEntry,
    CurrencyReport,
    ReportSummary,
    ValidationFailure,
    ExchangeReport,
)

__all__ = [
    "CurrencyReserve",
    "ProfitLossEntry",
    "CurrencyReport",
    "ReportSummary",
    "ValidationFailure",
    "ExchangeReport",
]
