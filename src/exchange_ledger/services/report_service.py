"""Exchange report service: store to report."""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from exchange_ledger.domain.models import Currency
from exchange_ledger.domain.views import ExchangeReport
from exchange_ledger.repositories.protocols import ExchangeTransactionRepository
from exchange_ledger.services.report_assembler import CurrencyNames, ReportAssembler, ReportFilter
from exchange_ledger.services.report_cache import ReportCache
from exchange_ledger.services.validation import TransactionValidator


class ExchangeReportService:
    """
    Serves the profit/loss dashboard and the reserves view.

    Every call re-derives the figures from the full ledger; the optional
    cache only short-circuits identical windows until invalidated.
    """

    def __init__(
        self,
        transaction_repo: ExchangeTransactionRepository,
        assembler: Optional[ReportAssembler] = None,
        cache: Optional[ReportCache] = None,
        currencies: CurrencyNames = None,
    ):
        self._transaction_repo = transaction_repo
        self._assembler = assembler or ReportAssembler()
        self._cache = cache
        self._currencies = currencies

    def dashboard(
        self,
        currency_code: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        market_rates: Optional[Mapping[str, Decimal]] = None,
    ) -> ExchangeReport:
        """Profit/loss report for a currency and date window."""
        report_filter = ReportFilter(
            currency_code=currency_code,
            from_date=from_date,
            to_date=to_date,
        )
        key = (report_filter.currency_code, report_filter.from_date, report_filter.to_date)
        cacheable = self._cache is not None and not market_rates

        if cacheable:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        transactions = self._transaction_repo.list_transactions(
            currency_code=report_filter.currency_code,
            include_inactive=False,
        )
        report = self._assembler.assemble(
            transactions,
            report_filter=report_filter,
            currencies=self._currencies,
            market_rates=market_rates,
        )

        if cacheable:
            self._cache.put(key, report)
        return report

    def reserves(self, currency_code: Optional[str] = None) -> ExchangeReport:
        """Reserve report over the full ledger history."""
        return self.dashboard(currency_code=currency_code)

    def from_records(
        self,
        records: Iterable[Any],
        report_filter: Optional[ReportFilter] = None,
        currencies: CurrencyNames = None,
        market_rates: Optional[Mapping[str, Decimal]] = None,
    ) -> ExchangeReport:
        """Report over caller-supplied raw records, bypassing the store."""
        return build_report_from_records(
            records,
            report_filter=report_filter,
            currencies=currencies if currencies is not None else self._currencies,
            market_rates=market_rates,
            assembler=self._assembler,
        )

    def invalidate(self, currency_code: Optional[str] = None) -> int:
        """Call after a ledger write for currency_code; returns reports dropped."""
        if self._cache is None:
            return 0
        return self._cache.invalidate(currency_code)


def build_report_from_records(
    records: Iterable[Any],
    report_filter: Optional[ReportFilter] = None,
    currencies: CurrencyNames = None,
    market_rates: Optional[Mapping[str, Decimal]] = None,
    assembler: Optional[ReportAssembler] = None,
    validator: Optional[TransactionValidator] = None,
) -> ExchangeReport:
    """Parse raw records and assemble a report; malformed ones are skipped."""
    validator = validator or TransactionValidator()
    assembler = assembler or ReportAssembler(validator=validator)
    transactions, failures = validator.parse_records(records)
    return assembler.assemble(
        transactions,
        report_filter=report_filter,
        currencies=currencies,
        market_rates=market_rates,
        skipped=failures,
    )
