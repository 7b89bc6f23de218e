"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Boolean,
    Numeric,
)

from exchange_ledger.core.timezone import now_local_naive
from exchange_ledger.repositories.sqlalchemy.database import Base


class MoneyExchangeORM(Base):
    """SQLAlchemy model for a money-exchange ledger entry."""

    __tablename__ = "money_exchanges"

    txn_id = Column(String(36), primary_key=True)
    # Plain string so legacy values survive to validation
    txn_type = Column(String(20), nullable=True)
    txn_date = Column(Date, nullable=True, index=True)
    currency_code = Column(String(10), nullable=True, index=True)
    currency_name = Column(String(100), nullable=True)
    exchange_rate = Column(Numeric(precision=18, scale=6), nullable=True)
    quantity = Column(Numeric(precision=18, scale=4), nullable=True)
    amount_bdt = Column(Numeric(precision=18, scale=2), nullable=True)
    full_name = Column(String(255), nullable=True)
    mobile_number = Column(String(32), nullable=True)
    dealer_id = Column(String(36), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    # Naive Asia/Dhaka wall-clock time, matching to_local()
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=now_local_naive)
