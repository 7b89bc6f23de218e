"""
Unit tests for CostBasisTracker.

Tests cover:
- Weighted-average price after buys
- Sells leave the average unchanged
- Realized P/L attribution per sale
- Over-sell clamping
- Sell with no prior purchase
- Recorded BDT amount preferred over quantity × rate
"""

from decimal import Decimal

import pytest

from exchange_ledger.services import CostBasisTracker

from tests.conftest import buy, sell, adjust, assert_decimal_equal


class TestWeightedAverage:
    """Tests for WAC maintenance."""

    def test_no_buys_reports_zero(self):
        tracker = CostBasisTracker("USD")

        assert tracker.weighted_average_purchase_price == Decimal("0")

    def test_two_buys(self):
        """
        GIVEN Buy 1000 @ 110 and Buy 500 @ 120
        WHEN tracked
        THEN WAC = 170,000 / 1500
        """
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("1000", "110"))
        tracker.apply(buy("500", "120"))

        assert tracker.weighted_average_purchase_price == Decimal("170000") / Decimal("1500")
        assert tracker.total_purchase_cost == Decimal("170000")

    @pytest.mark.parametrize(
        "lots",
        [
            [("10", "100"), ("20", "105"), ("5", "110"), ("40", "120")],
            [("1000", "99.5"), ("1", "150")],
            [("3.25", "80"), ("3.25", "81"), ("3.25", "82")],
        ],
    )
    def test_wac_within_buy_rate_range(self, lots):
        tracker = CostBasisTracker("USD")
        for quantity, rate in lots:
            tracker.apply(buy(quantity, rate))

        rates = [Decimal(rate) for _, rate in lots]
        assert min(rates) <= tracker.weighted_average_purchase_price <= max(rates)

    def test_recorded_amount_preferred(self):
        """
        GIVEN a Buy whose recorded BDT amount differs from quantity × rate
        WHEN tracked
        THEN the recorded amount is the cost
        """
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("3", "110.33", amount_bdt=Decimal("331")))

        assert tracker.total_purchase_cost == Decimal("331")
        assert tracker.weighted_average_purchase_price == Decimal("331") / Decimal("3")

    def test_zero_recorded_amount_falls_back_to_rate(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("10", "110", amount_bdt=Decimal("0")))

        assert tracker.total_purchase_cost == Decimal("1100")

    def test_adjustment_ignored(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))
        assert tracker.apply(adjust("50")) is None

        assert tracker.weighted_average_purchase_price == Decimal("110")
        assert tracker.costed_quantity == Decimal("100")


class TestSells:
    """Tests for sale attribution."""

    def test_sell_does_not_change_wac(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("1000", "110"))
        tracker.apply(buy("500", "120"))
        before = tracker.weighted_average_purchase_price

        tracker.apply(sell("800", "118"))

        assert tracker.weighted_average_purchase_price == before
        assert tracker.costed_quantity == Decimal("700")

    def test_realized_profit_from_example(self):
        """
        GIVEN WAC 113.33 over 1500 units
        WHEN 800 are sold @ 118
        THEN realized P/L = 800 × (118 - 113.333...) = 3,733.33
        """
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("1000", "110"))
        tracker.apply(buy("500", "120"))

        attribution = tracker.apply(sell("800", "118"))

        assert attribution.proceeds == Decimal("94400")
        assert_decimal_equal(attribution.realized_profit_loss, Decimal("3733.33"))
        assert_decimal_equal(tracker.realized_profit_loss, Decimal("3733.33"))

    def test_sell_above_wac_is_gain(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))

        attribution = tracker.apply(sell("10", "111"))

        assert attribution.realized_profit_loss > 0

    def test_sell_below_wac_is_loss(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))

        attribution = tracker.apply(sell("10", "109"))

        assert attribution.realized_profit_loss == Decimal("-10")

    def test_buy_after_selling_out_restarts_average(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))
        tracker.apply(sell("100", "115"))
        tracker.apply(buy("50", "120"))

        assert tracker.weighted_average_purchase_price == Decimal("120")
        assert tracker.total_cost == Decimal("6000")


class TestIrregularSells:
    """Tests for over-sell and missing cost basis."""

    def test_oversell_clamps_cost(self):
        """
        GIVEN 100 costed units @ 110
        WHEN 150 are sold @ 115
        THEN 50 are flagged over-sold and carry zero cost
        """
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))

        attribution = tracker.apply(sell("150", "115"), reserve_before=Decimal("100"))

        assert attribution.over_sold_quantity == Decimal("50")
        assert attribution.costed_quantity == Decimal("100")
        assert attribution.cost_removed == Decimal("11000")
        assert attribution.realized_profit_loss == Decimal("6250")
        assert tracker.costed_quantity == Decimal("0")
        assert tracker.over_sold_quantity == Decimal("50")
        assert tracker.weighted_average_purchase_price == Decimal("110")

    def test_oversell_without_reserve_uses_costed_quantity(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))

        attribution = tracker.apply(sell("130", "115"))

        assert attribution.over_sold_quantity == Decimal("30")

    def test_adjusted_reserve_covers_sale(self):
        """
        GIVEN 100 costed units plus a +10 adjustment
        WHEN 105 are sold
        THEN nothing is over-sold but only 100 units carry cost
        """
        tracker = CostBasisTracker("USD")
        tracker.apply(buy("100", "110"))

        attribution = tracker.apply(sell("105", "112"), reserve_before=Decimal("110"))

        assert attribution.over_sold_quantity == Decimal("0")
        assert attribution.cost_removed == Decimal("11000")
        assert attribution.realized_profit_loss == Decimal("760")

    def test_first_sell_without_buy(self):
        """
        GIVEN no purchase of EUR
        WHEN Sell 200 @ 130
        THEN cost basis is unavailable and the proceeds are the gain
        """
        tracker = CostBasisTracker("EUR")

        attribution = tracker.apply(sell("200", "130"), reserve_before=Decimal("0"))

        assert tracker.cost_basis_unavailable is True
        assert attribution.cost_basis_available is False
        assert tracker.realized_profit_loss == Decimal("26000")
        assert tracker.weighted_average_purchase_price == Decimal("0")
        assert tracker.over_sold_quantity == Decimal("200")

    def test_no_exception_for_irregular_data(self):
        tracker = CostBasisTracker("USD")
        tracker.apply(sell("5", "100"))
        tracker.apply(sell("5", "100"))
        tracker.apply(buy("1", "90"))
        tracker.apply(sell("5", "100"))

        assert tracker.costed_quantity == Decimal("0")
        assert tracker.total_sale_revenue == Decimal("1500")
