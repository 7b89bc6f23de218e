"""Service layer - reserve and profit/loss computation."""

from exchange_ledger.services.validation import TransactionValidator, parse_record
from exchange_ledger.services.ordering import order_chronologically
from exchange_ledger.services.reserve_aggregator import ReserveAggregator, ReserveTotals, ReserveStep
from exchange_ledger.services.cost_basis import CostBasisTracker, SaleAttribution
from exchange_ledger.services.profit_loss import ProfitLossCalculator, CurrencyPosition
from exchange_ledger.services.report_assembler import ReportAssembler, ReportFilter
from exchange_ledger.services.report_cache import ReportCache
from exchange_ledger.services.report_service import ExchangeReportService, build_report_from_records

__all__ = [
    "TransactionValidator",
    "parse_record",
    "order_chronologically",
    "ReserveAggregator",
    "ReserveTotals",
    "ReserveStep",
    "CostBasisTracker",
    "SaleAttribution",
    "ProfitLossCalculator",
    "CurrencyPosition",
    "ReportAssembler",
    "ReportFilter",
    "ReportCache",
    "ExchangeReportService",
    "build_report_from_records",
]
