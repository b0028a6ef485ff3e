"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_ledger.api.main import create_app
from credit_ledger.domain.credit_desk import CreditDesk
from credit_ledger.domain.credit_line import CreditLine
from credit_ledger.domain.pool import InMemoryPool
from credit_ledger.infrastructure.database.models import Base
from credit_ledger.infrastructure.database.session import get_db
from credit_ledger.utils.units import percent_to_wad, to_wad


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN = "owner"
DEPOSITOR = "person2"
UNDERWRITER = "person2"
BORROWER = "person3"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def pool() -> InMemoryPool:
    """Pool holding 90 units deposited by a capital provider"""
    pool = InMemoryPool(owner=ADMIN)
    pool.deposit(to_wad(90), sender=DEPOSITOR)
    return pool


@pytest.fixture
def desk(pool: InMemoryPool) -> CreditDesk:
    """Credit desk holding the pool's custody capability"""
    capability = pool.transfer_ownership(ADMIN, "credit-desk")
    return CreditDesk(admin=ADMIN, pool=pool, pool_capability=capability)


@pytest.fixture
def underwritten_desk(desk: CreditDesk) -> CreditDesk:
    """Desk with an underwriter limited to 600 units"""
    desk.set_underwriter_governance_limit(ADMIN, UNDERWRITER, to_wad(600))
    return desk


@pytest.fixture
def credit_line(underwritten_desk: CreditDesk) -> CreditLine:
    """500 unit line at 5% APR, 10% collateral, paid every 30 days over 365 days"""
    return underwritten_desk.create_credit_line(
        caller=UNDERWRITER,
        borrower=BORROWER,
        limit=to_wad(500),
        interest_apr=percent_to_wad(5),
        min_collateral_percent=to_wad(10),
        payment_period_in_days=30,
        term_in_days=365,
    )


@pytest.fixture
def client(db: Session, desk: CreditDesk) -> TestClient:
    """Create FastAPI test client with test database and an isolated desk"""
    app = create_app(credit_desk=desk)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
