"""Exchange transaction repository protocol."""

from typing import Protocol, Optional

from exchange_ledger.domain.models import CurrencyTransaction


class ExchangeTransactionRepository(Protocol):
    """Read-only interface to the money-exchange ledger."""

    def list_transactions(
        self,
        currency_code: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[CurrencyTransaction]:
        """List ledger entries, optionally for one currency."""
        ...
