"""
Shared pytest fixtures for all test modules.

Uses an in-memory SQLite database (StaticPool) so every test
function gets a clean, isolated database — no disk I/O, no state leakage.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from flowledger.database import Base, get_db
from flowledger.dependencies import get_authorizer, get_notifier
from flowledger import models
from flowledger.services.authorization import AllowListAuthorizer
from flowledger.services.kyc import KycRegistry
from flowledger.services.ledger import Ledger
from flowledger.services.notifier import BaseNotifier

WRITER = "owner"
BASE_TS = 1705312800  # 2024-01-15 10:00:00 UTC


# ---------------------------------------------------------------------------
# In-memory database engine shared across all fixtures in a test session.
# StaticPool forces all SQLAlchemy connections to reuse the same underlying
# sqlite3 connection, which is required for in-memory SQLite.
# ---------------------------------------------------------------------------
TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


class CollectingNotifier(BaseNotifier):
    """Keeps every published event in order."""

    def __init__(self):
        self.events = []

    def publish(self, event):
        self.events.append(event)


@pytest.fixture(autouse=True)
def reset_db():
    """Drop and recreate all tables before each test for full isolation."""
    Base.metadata.drop_all(bind=TEST_ENGINE)
    Base.metadata.create_all(bind=TEST_ENGINE)
    yield
    Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def db(reset_db):
    """Yield a SQLAlchemy session backed by the in-memory test database."""
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def authorizer():
    return AllowListAuthorizer([WRITER])


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def ledger(db, authorizer, notifier):
    return Ledger(db, authorizer, notifier)


@pytest.fixture
def kyc(db, authorizer, notifier):
    return KycRegistry(db, authorizer, notifier)


@pytest.fixture
def client(db, authorizer, notifier):
    """
    FastAPI TestClient with the real DB, authorizer and notifier dependencies
    overridden. The TestClient is NOT used as a context manager so the
    lifespan hook (which touches the on-disk DB) is skipped.
    """
    from flowledger.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_authorizer] = lambda: authorizer
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app, headers={"X-Caller": WRITER})
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helper — not a fixture — so any test file can import and call it directly.
# ---------------------------------------------------------------------------
def record_txn(
    ledger: Ledger,
    txn_id: str,
    sender: str,
    receiver: str,
    amount: int = 100,
    now: int = BASE_TS,
    caller: str = WRITER,
) -> models.Transaction:
    return ledger.record(caller, txn_id, sender, receiver, amount, now)
