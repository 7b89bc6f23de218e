"""Profit/loss calculation for a single currency."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from exchange_ledger.domain.models import CurrencyTransaction
from exchange_ledger.domain.views import CurrencyReserve, ProfitLossEntry
from exchange_ledger.services.cost_basis import CostBasisTracker, SaleAttribution
from exchange_ledger.services.reserve_aggregator import ReserveAggregator

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class CurrencyPosition:
    """Unrounded reserve and P/L for one currency plus per-sale detail."""

    reserve: CurrencyReserve
    profit_loss: ProfitLossEntry
    sales: list[SaleAttribution] = field(default_factory=list)


class ProfitLossCalculator:
    """
    Replays one currency's ledger and values what is left.

    A single chronological pass drives both the ReserveAggregator and the
    CostBasisTracker, so each sell sees the reserve and WAC in effect at
    that moment.
    """

    def valuation_rate(
        self,
        last_sell_rate: Decimal,
        average_cost: Decimal,
        market_rate: Optional[Decimal] = None,
    ) -> Decimal:
        """
        Rate used to value the remaining reserve.

        Chain: configured market rate, then last sell rate, then WAC. Falling
        back to WAC yields zero unrealized P/L rather than a guess.
        """
        if market_rate is not None and market_rate > 0:
            return market_rate
        if last_sell_rate > 0:
            return last_sell_rate
        return average_cost

    def calculate(
        self,
        currency_code: str,
        transactions: Iterable[CurrencyTransaction],
        market_rate: Optional[Decimal] = None,
    ) -> CurrencyPosition:
        """
        Compute reserve and P/L for one currency.

        transactions must be validated, active, of this currency and in
        chronological order.
        """
        aggregator = ReserveAggregator(currency_code)
        tracker = CostBasisTracker(currency_code)
        sales: list[SaleAttribution] = []

        for txn in transactions:
            step = aggregator.apply(txn)
            attribution = tracker.apply(txn, reserve_before=step.reserve_before)
            if attribution is not None:
                sales.append(attribution)

        totals = aggregator.totals
        average = tracker.weighted_average_purchase_price
        rate = self.valuation_rate(totals.last_sell_rate, average, market_rate)

        unrealized = (rate - average) * totals.reserve if totals.reserve > 0 else ZERO

        if totals.reserve < 0:
            logger.warning("%s reserve is negative: %s", currency_code, totals.reserve)

        reserve = CurrencyReserve(
            currency_code=currency_code,
            total_bought=totals.total_bought,
            total_sold=totals.total_sold,
            adjustment_amount=totals.adjustment_amount,
            reserve=totals.reserve,
            weighted_average_purchase_price=average,
            last_buy_rate=totals.last_buy_rate,
            last_sell_rate=totals.last_sell_rate,
            current_reserve_value=totals.reserve * rate,
        )
        profit_loss = ProfitLossEntry(
            currency_code=currency_code,
            realized_profit_loss=tracker.realized_profit_loss,
            unrealized_profit_loss=unrealized,
            total_purchase_cost=tracker.total_purchase_cost,
            total_sale_revenue=tracker.total_sale_revenue,
            over_sold_quantity=tracker.over_sold_quantity,
            cost_basis_unavailable=tracker.cost_basis_unavailable,
        )
        return CurrencyPosition(reserve=reserve, profit_loss=profit_loss, sales=sales)
