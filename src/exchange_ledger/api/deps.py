"""Dependency injection for FastAPI."""

import threading
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from exchange_ledger.config.settings import get_settings
from exchange_ledger.repositories.sqlalchemy import SqlAlchemyExchangeRepository, get_db
from exchange_ledger.services import ExchangeReportService, ReportAssembler, ReportCache

_report_cache: Optional[ReportCache] = None
_report_cache_lock = threading.Lock()


def get_exchange_repo(db: Session = Depends(get_db)) -> SqlAlchemyExchangeRepository:
    """Provide ExchangeTransactionRepository instance."""
    return SqlAlchemyExchangeRepository(db)


def get_report_cache() -> Optional[ReportCache]:
    """Provide the process-wide report cache, or None when disabled."""
    global _report_cache
    settings = get_settings()
    if not settings.report_cache_enabled:
        return None
    with _report_cache_lock:
        if _report_cache is None:
            _report_cache = ReportCache(
                max_entries=settings.report_cache_max_entries,
                ttl_seconds=settings.report_cache_ttl_seconds,
            )
        return _report_cache


def reset_report_cache() -> None:
    """Forget the process-wide cache so the next request builds it from settings."""
    global _report_cache
    with _report_cache_lock:
        _report_cache = None


def get_report_assembler() -> ReportAssembler:
    """Provide ReportAssembler configured with reporting precision."""
    settings = get_settings()
    return ReportAssembler(
        money_places=settings.money_places,
        rate_places=settings.rate_places,
    )


def get_report_service(
    transaction_repo: SqlAlchemyExchangeRepository = Depends(get_exchange_repo),
    assembler: ReportAssembler = Depends(get_report_assembler),
    cache: Optional[ReportCache] = Depends(get_report_cache),
) -> ExchangeReportService:
    """Provide ExchangeReportService instance."""
    return ExchangeReportService(
        transaction_repo=transaction_repo,
        assembler=assembler,
        cache=cache,
    )
