"""CurrencyTransaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from exchange_ledger.domain.models.enums import ExchangeType


@dataclass(frozen=True)
class CurrencyTransaction:
    """
    One money-exchange ledger entry (source of truth).

    - Buy/Sell move `quantity` units of foreign currency at `exchange_rate`
      BDT per unit, settled for `amount_bdt`
    - Adjustment carries a signed reserve correction in `quantity`
    - Inactive (cancelled) entries stay in the store but never aggregate

    The type is parsed leniently: an unrecognised value is kept as the raw
    string so validation can reject the entry on its own.
    """

    txn_id: str
    currency_code: Optional[str]
    txn_type: Union[ExchangeType, str, None]
    quantity: Optional[Decimal]
    exchange_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    amount_bdt: Optional[Decimal] = None
    txn_date: Optional[date] = None
    created_at: Optional[datetime] = None
    is_active: bool = True
    currency_name: Optional[str] = None
    full_name: Optional[str] = None
    mobile_number: Optional[str] = None
    dealer_id: Optional[str] = None

    def __post_init__(self) -> None:
        parsed = ExchangeType.parse(self.txn_type)
        if parsed is not None:
            object.__setattr__(self, "txn_type", parsed)
        if self.currency_code is not None:
            object.__setattr__(self, "currency_code", self.currency_code.strip().upper())

    @property
    def is_buy(self) -> bool:
        return self.txn_type == ExchangeType.BUY

    @property
    def is_sell(self) -> bool:
        return self.txn_type == ExchangeType.SELL

    @property
    def is_adjustment(self) -> bool:
        return self.txn_type == ExchangeType.ADJUSTMENT

    @property
    def settlement_amount(self) -> Decimal:
        """
        BDT value of the entry.

        The recorded amount_bdt wins when present and non-zero since it is
        what actually changed hands; otherwise quantity × exchange_rate.
        """
        if self.amount_bdt:
            return self.amount_bdt
        return (self.quantity or Decimal("0")) * self.exchange_rate
