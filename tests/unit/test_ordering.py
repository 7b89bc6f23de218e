"""Unit tests for chronological ordering."""

from datetime import date, datetime

from exchange_ledger.services import order_chronologically

from tests.conftest import buy, sell, dhaka_datetime


class TestOrderChronologically:
    """Ledger order: date, then created_at, then input order."""

    def test_date_first(self):
        late = buy("1", "110", txn_date=date(2024, 6, 2), created_at=dhaka_datetime(2024, 6, 1, 8))
        early = buy("1", "110", txn_date=date(2024, 6, 1), created_at=dhaka_datetime(2024, 6, 2, 8))

        assert order_chronologically([late, early]) == [early, late]

    def test_created_at_breaks_date_ties(self):
        afternoon = sell("1", "110", created_at=dhaka_datetime(2024, 6, 1, 15))
        morning = buy("1", "110", created_at=dhaka_datetime(2024, 6, 1, 9))

        assert order_chronologically([afternoon, morning]) == [morning, afternoon]

    def test_naive_and_aware_timestamps_compare(self):
        naive = buy("1", "110", created_at=datetime(2024, 6, 1, 12, 0))
        aware = buy("1", "110", created_at=dhaka_datetime(2024, 6, 1, 11))

        assert order_chronologically([naive, aware]) == [aware, naive]

    def test_missing_timestamp_sorts_first(self):
        stamped = buy("1", "110", created_at=dhaka_datetime(2024, 6, 1, 9))
        unstamped = buy("1", "110")

        assert order_chronologically([stamped, unstamped]) == [unstamped, stamped]

    def test_stable_for_full_ties(self):
        first = buy("1", "110")
        second = sell("1", "111")
        third = buy("2", "112")

        assert order_chronologically([first, second, third]) == [first, second, third]

    def test_input_not_mutated(self):
        entries = [buy("1", "110", txn_date=date(2024, 6, 2)), buy("1", "110", txn_date=date(2024, 6, 1))]
        snapshot = list(entries)

        order_chronologically(entries)

        assert entries == snapshot
