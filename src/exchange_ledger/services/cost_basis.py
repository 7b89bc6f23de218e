"""Moving-average cost basis tracking."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from exchange_ledger.domain.models import CurrencyTransaction, ExchangeType

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class SaleAttribution:
    """Cost attributed to one sell."""

    txn_id: str
    quantity: Decimal
    proceeds: Decimal
    average_cost: Decimal  # WAC in effect at the sale
    costed_quantity: Decimal  # Portion of quantity that carried a cost basis
    cost_removed: Decimal
    over_sold_quantity: Decimal
    cost_basis_available: bool

    @property
    def realized_profit_loss(self) -> Decimal:
        return self.proceeds - self.cost_removed


class CostBasisTracker:
    """
    Weighted-average purchase price (WAC) for one currency.

    Only buys move the average. A sell removes cost at the average in
    effect at that moment, leaving the average unchanged. Quantity sold
    beyond what carries a cost basis is taken at zero cost.
    """

    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        self._costed_quantity = ZERO
        self._total_cost = ZERO
        self._average = ZERO
        self._has_cost_basis = False
        self.total_purchase_cost = ZERO
        self.total_sale_revenue = ZERO
        self.realized_profit_loss = ZERO
        self.over_sold_quantity = ZERO
        self.cost_basis_unavailable = False

    @property
    def weighted_average_purchase_price(self) -> Decimal:
        """Current WAC; 0 when nothing has been bought."""
        return self._average

    @property
    def costed_quantity(self) -> Decimal:
        return self._costed_quantity

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost

    def apply_buy(self, txn: CurrencyTransaction) -> Decimal:
        """Add a purchase to the pool and return the new WAC."""
        quantity = txn.quantity or ZERO
        cost = txn.settlement_amount

        self.total_purchase_cost += cost
        self._total_cost += cost
        self._costed_quantity += quantity
        if self._costed_quantity > 0:
            self._average = self._total_cost / self._costed_quantity
            self._has_cost_basis = True
        return self._average

    def apply_sell(
        self,
        txn: CurrencyTransaction,
        reserve_before: Optional[Decimal] = None,
    ) -> SaleAttribution:
        """
        Remove a sale from the pool at the current WAC.

        reserve_before is the reserve level just ahead of the sale; the part
        of the sale above it is reported as over-sold. Without it the costed
        quantity stands in for the reserve.
        """
        quantity = txn.quantity or ZERO
        proceeds = txn.settlement_amount
        average = self._average

        costed = min(quantity, self._costed_quantity)
        cost_removed = costed * average
        self._costed_quantity -= costed
        self._total_cost -= cost_removed
        if self._costed_quantity == 0:
            self._total_cost = ZERO

        available = reserve_before if reserve_before is not None else self._costed_quantity + costed
        over_sold = max(quantity - max(available, ZERO), ZERO)

        attribution = SaleAttribution(
            txn_id=txn.txn_id,
            quantity=quantity,
            proceeds=proceeds,
            average_cost=average,
            costed_quantity=costed,
            cost_removed=cost_removed,
            over_sold_quantity=over_sold,
            cost_basis_available=self._has_cost_basis,
        )

        self.total_sale_revenue += proceeds
        self.realized_profit_loss += attribution.realized_profit_loss
        self.over_sold_quantity += over_sold
        if not self._has_cost_basis:
            self.cost_basis_unavailable = True
            logger.warning(
                "%s sale %s has no prior purchase; proceeds counted as gain",
                self.currency_code,
                txn.txn_id,
            )
        elif over_sold > 0:
            logger.warning(
                "%s sale %s exceeds reserve by %s",
                self.currency_code,
                txn.txn_id,
                over_sold,
            )
        return attribution

    def apply(
        self,
        txn: CurrencyTransaction,
        reserve_before: Optional[Decimal] = None,
    ) -> Optional[SaleAttribution]:
        """Dispatch by type; adjustments leave the cost basis untouched."""
        if txn.txn_type == ExchangeType.BUY:
            self.apply_buy(txn)
        elif txn.txn_type == ExchangeType.SELL:
            return self.apply_sell(txn, reserve_before=reserve_before)
        return None
