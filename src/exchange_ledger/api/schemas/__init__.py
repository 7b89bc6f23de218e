"""Pydantic schemas for API request/response."""

from exchange_ledger.api.schemas.report import (
    CurrencyReportResponse,
    ReportSummaryResponse,
    SkippedTransactionResponse,
    ExchangeReportResponse,
    ReportRequest,
    CacheInvalidationResponse,
)

__all__ = [
    "CurrencyReportResponse",
    "ReportSummaryResponse",
    "SkippedTransactionResponse",
    "ExchangeReportResponse",
    "ReportRequest",
    "CacheInvalidationResponse",
]
