"""
Pytest configuration and fixtures for exchange ledger tests.

This module provides:
- Factory helpers for Buy/Sell/Adjustment transactions
- Time helpers for Asia/Dhaka
- An in-memory repository for service tests
- In-memory SQLite database fixtures
- FastAPI test client wired to the test database
"""

import itertools
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from exchange_ledger.api.deps import reset_report_cache
from exchange_ledger.config.settings import Settings, set_settings, reset_settings
from exchange_ledger.core.timezone import LOCAL_TZ
from exchange_ledger.domain.models import CurrencyTransaction, ExchangeType
from exchange_ledger.main import app
from exchange_ledger.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from exchange_ledger.repositories.sqlalchemy import orm_models  # noqa: F401
from exchange_ledger.repositories.sqlalchemy import SqlAlchemyExchangeRepository
from exchange_ledger.services import ExchangeReportService, ReportAssembler, ReportCache


# =============================================================================
# TIME HELPERS
# =============================================================================


def dhaka_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Dhaka."""
    return LOCAL_TZ.localize(datetime(year, month, day, hour, minute, second))


# =============================================================================
# TRANSACTION FACTORIES
# =============================================================================

_ids = itertools.count(1)


def make_txn(
    txn_type: ExchangeType,
    quantity: Optional[Decimal],
    rate: Decimal = Decimal("0"),
    currency_code: Optional[str] = "USD",
    txn_date: Optional[date] = date(2024, 6, 1),
    created_at: Optional[datetime] = None,
    amount_bdt: Optional[Decimal] = None,
    txn_id: Optional[str] = None,
    is_active: bool = True,
    currency_name: Optional[str] = None,
) -> CurrencyTransaction:
    """Helper to create a ledger entry."""
    return CurrencyTransaction(
        txn_id=txn_id or f"txn-{next(_ids)}",
        currency_code=currency_code,
        txn_type=txn_type,
        quantity=quantity,
        exchange_rate=rate,
        amount_bdt=amount_bdt,
        txn_date=txn_date,
        created_at=created_at,
        is_active=is_active,
        currency_name=currency_name,
    )


def buy(quantity: str, rate: str, **kwargs) -> CurrencyTransaction:
    """Helper to create a Buy entry."""
    return make_txn(ExchangeType.BUY, Decimal(quantity), Decimal(rate), **kwargs)


def sell(quantity: str, rate: str, **kwargs) -> CurrencyTransaction:
    """Helper to create a Sell entry."""
    return make_txn(ExchangeType.SELL, Decimal(quantity), Decimal(rate), **kwargs)


def adjust(quantity: str, **kwargs) -> CurrencyTransaction:
    """Helper to create an Adjustment entry."""
    return make_txn(ExchangeType.ADJUSTMENT, Decimal(quantity), **kwargs)


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# IN-MEMORY REPOSITORY
# =============================================================================


class InMemoryExchangeRepository:
    """Exchange repository over a plain list; counts reads."""

    def __init__(self, transactions: Optional[list[CurrencyTransaction]] = None):
        self.transactions = list(transactions or [])
        self.calls = 0

    def list_transactions(
        self,
        currency_code: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[CurrencyTransaction]:
        self.calls += 1
        return [
            t
            for t in self.transactions
            if (currency_code is None or t.currency_code == currency_code)
            and (include_inactive or t.is_active)
        ]


@pytest.fixture
def memory_repo() -> InMemoryExchangeRepository:
    """Provide an empty in-memory repository."""
    return InMemoryExchangeRepository()


@pytest.fixture
def assembler() -> ReportAssembler:
    """Provide ReportAssembler with default precision."""
    return ReportAssembler()


@pytest.fixture
def cached_report_service(memory_repo) -> ExchangeReportService:
    """Provide ExchangeReportService with a report cache."""
    return ExchangeReportService(transaction_repo=memory_repo, cache=ReportCache())


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def exchange_repo(test_session) -> SqlAlchemyExchangeRepository:
    """Provide test ExchangeTransactionRepository."""
    return SqlAlchemyExchangeRepository(test_session)


@pytest.fixture
def exchange_factory(test_session) -> Callable[..., orm_models.MoneyExchangeORM]:
    """Factory for inserting money-exchange rows."""

    def _create(
        txn_type: str,
        quantity: str,
        rate: str = "0",
        currency_code: str = "USD",
        txn_date: date = date(2024, 6, 1),
        created_at: Optional[datetime] = None,
        amount_bdt: Optional[str] = None,
        is_active: bool = True,
        currency_name: Optional[str] = None,
    ) -> orm_models.MoneyExchangeORM:
        row = orm_models.MoneyExchangeORM(
            txn_id=f"row-{next(_ids)}",
            txn_type=txn_type,
            txn_date=txn_date,
            currency_code=currency_code,
            currency_name=currency_name,
            exchange_rate=Decimal(rate),
            quantity=Decimal(quantity),
            amount_bdt=Decimal(amount_bdt) if amount_bdt is not None else None,
            is_active=is_active,
            created_at=created_at or datetime(2024, 6, 1, 10, 0, 0),
        )
        test_session.add(row)
        test_session.commit()
        return row

    return _create


def _client_for(test_engine, settings: Settings):
    set_settings(settings)
    reset_database()
    reset_report_cache()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_report_cache()
    reset_database()
    reset_settings()


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    yield from _client_for(test_engine, Settings(database_url="sqlite://"))


@pytest.fixture
def cached_client(test_engine) -> TestClient:
    """Provide FastAPI test client with the report cache switched on."""
    yield from _client_for(
        test_engine,
        Settings(database_url="sqlite://", report_cache_enabled=True),
    )
