"""SQLAlchemy implementation of ExchangeTransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from exchange_ledger.domain.models import CurrencyTransaction
from exchange_ledger.repositories.sqlalchemy.orm_models import MoneyExchangeORM


class SqlAlchemyExchangeRepository:
    """SQLAlchemy-backed, read-only view of the exchange ledger."""

    def __init__(self, db: Session):
        self._db = db

    def list_transactions(
        self,
        currency_code: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[CurrencyTransaction]:
        """List ledger entries ordered by date, then creation time."""
        query = self._db.query(MoneyExchangeORM)
        if currency_code:
            query = query.filter(
                func.upper(MoneyExchangeORM.currency_code) == currency_code.strip().upper()
            )
        if not include_inactive:
            query = query.filter(MoneyExchangeORM.is_active == True)  # noqa: E712
        query = query.order_by(MoneyExchangeORM.txn_date, MoneyExchangeORM.created_at)
        return [self._to_domain(row) for row in query.all()]

    @staticmethod
    def _to_domain(orm_txn: MoneyExchangeORM) -> CurrencyTransaction:
        """Convert ORM row to domain model."""
        return CurrencyTransaction(
            txn_id=orm_txn.txn_id,
            currency_code=orm_txn.currency_code,
            txn_type=orm_txn.txn_type,
            quantity=orm_txn.quantity,
            exchange_rate=orm_txn.exchange_rate if orm_txn.exchange_rate is not None else Decimal("0"),
            amount_bdt=orm_txn.amount_bdt,
            txn_date=orm_txn.txn_date,
            created_at=orm_txn.created_at,
            is_active=bool(orm_txn.is_active),
            currency_name=orm_txn.currency_name,
            full_name=orm_txn.full_name,
            mobile_number=orm_txn.mobile_number,
            dealer_id=orm_txn.dealer_id,
        )
