"""Money-exchange reserve and profit/loss endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from exchange_ledger.api.deps import get_report_assembler, get_report_service
from exchange_ledger.api.schemas import (
    CacheInvalidationResponse,
    ExchangeReportResponse,
    ReportRequest,
)
from exchange_ledger.services import (
    ExchangeReportService,
    ReportAssembler,
    ReportFilter,
    build_report_from_records,
)

router = APIRouter(prefix="/money-exchange", tags=["money-exchange"])


@router.get(
    "/dashboard",
    response_model=ExchangeReportResponse,
    response_model_exclude_none=True,
)
def get_dashboard(
    currency_code: Optional[str] = Query(None, alias="currencyCode"),
    from_date: Optional[date] = Query(None, alias="fromDate"),
    to_date: Optional[date] = Query(None, alias="toDate"),
    service: ExchangeReportService = Depends(get_report_service),
) -> ExchangeReportResponse:
    """
    Profit/loss dashboard.

    The date window bounds the replay: reserve and WAC are recomputed from
    the transactions inside [fromDate, toDate] only.
    """
    report = service.dashboard(
        currency_code=currency_code,
        from_date=from_date,
        to_date=to_date,
    )
    return ExchangeReportResponse.from_view(report)


@router.get(
    "/reserves",
    response_model=ExchangeReportResponse,
    response_model_exclude_none=True,
)
def get_reserves(
    currency_code: Optional[str] = Query(None, alias="currencyCode"),
    service: ExchangeReportService = Depends(get_report_service),
) -> ExchangeReportResponse:
    """Current reserve per currency over the full ledger history."""
    return ExchangeReportResponse.from_view(service.reserves(currency_code=currency_code))


@router.post(
    "/report",
    response_model=ExchangeReportResponse,
    response_model_exclude_none=True,
)
def post_report(
    request: ReportRequest,
    assembler: ReportAssembler = Depends(get_report_assembler),
) -> ExchangeReportResponse:
    """Compute a report over the supplied transactions without touching the store."""
    report = build_report_from_records(
        request.transactions,
        report_filter=ReportFilter(
            currency_code=request.currency_code,
            from_date=request.from_date,
            to_date=request.to_date,
        ),
        currencies=request.currencies,
        market_rates=request.market_rates,
        assembler=assembler,
    )
    return ExchangeReportResponse.from_view(report)


@router.post(
    "/cache/invalidate",
    response_model=CacheInvalidationResponse,
    response_model_exclude_none=True,
)
def invalidate_cache(
    currency_code: Optional[str] = Query(None, alias="currencyCode"),
    service: ExchangeReportService = Depends(get_report_service),
) -> CacheInvalidationResponse:
    """
    Drop cached reports after a ledger write.

    Called by whatever writes money_exchanges. Without currencyCode every
    cached window goes. A no-op when the cache is disabled.
    """
    dropped = service.invalidate(currency_code)
    return CacheInvalidationResponse(currency_code=currency_code, invalidated=dropped)
