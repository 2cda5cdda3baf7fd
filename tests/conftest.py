"""
Pytest configuration and fixtures for the account management tests.

This module provides:
- In-memory SQLite database fixtures
- Document store fixtures (SQLAlchemy-backed and in-memory)
- A deterministic store clock
- Failing store doubles for error-boundary tests
- Repository, service and API client fixtures
"""

import threading
import time
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from fintrack.main import app
from fintrack.config.settings import Settings, set_settings, reset_settings
from fintrack.core.timezone import UTC
from fintrack.domain.models import Account
from fintrack.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from fintrack.repositories.sqlalchemy import orm_models  # noqa: F401
from fintrack.repositories.sqlalchemy import SqlAlchemyDocumentStore
from fintrack.repositories.memory import InMemoryDocumentStore
from fintrack.repositories.protocols import (
    Document,
    DocumentStoreError,
    StoreConnectionError,
)
from fintrack.repositories.account_repo import AccountRepository
from fintrack.repositories.locks import OwnerLockRegistry
from fintrack.services import AccountService


OWNER = "user-1"
OTHER_OWNER = "user-2"


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class TickingClock:
    """Store clock that advances one second per reading."""

    def __init__(self, start: datetime):
        self._current = start
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            value = self._current
            self._current = value + timedelta(seconds=1)
            return value


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed starting timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    """Provide a deterministic, strictly increasing store clock."""
    return TickingClock(fixed_now)


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


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def document_store(test_session, clock) -> SqlAlchemyDocumentStore:
    """Provide SQLAlchemy-backed DocumentStore."""
    return SqlAlchemyDocumentStore(test_session, clock=clock)


@pytest.fixture
def memory_store(clock) -> InMemoryDocumentStore:
    """Provide in-memory DocumentStore."""
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture(params=["sqlalchemy", "memory"])
def any_store(request, test_session, clock):
    """Run a test against every DocumentStore implementation."""
    if request.param == "sqlalchemy":
        return SqlAlchemyDocumentStore(test_session, clock=clock)
    return InMemoryDocumentStore(clock=clock)


class FailingDocumentStore:
    """Document store whose backend is always unreachable."""

    def __init__(self, error: Optional[DocumentStoreError] = None):
        self.error = error or StoreConnectionError("Network unavailable")

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise self.error

    def query(self, collection: str, filters: Mapping[str, Any]) -> list[Document]:
        raise self.error

    def insert(self, collection: str, data: Mapping[str, Any]) -> str:
        raise self.error

    def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        raise self.error

    def batch(self):
        raise self.error


class DelegatingStore:
    """Passes every call through to a working store."""

    def __init__(self, inner):
        self._inner = inner

    def get(self, collection, doc_id):
        return self._inner.get(collection, doc_id)

    def query(self, collection, filters):
        return self._inner.query(collection, filters)

    def insert(self, collection, data):
        return self._inner.insert(collection, data)

    def update(self, collection, doc_id, data):
        self._inner.update(collection, doc_id, data)

    def batch(self):
        return self._inner.batch()


class QueryFailingStore(DelegatingStore):
    """Wraps a working store but fails every query."""

    def query(self, collection, filters):
        raise DocumentStoreError("Index not ready")


class SlowQueryStore(DelegatingStore):
    """Wraps a working store and pauses inside every query."""

    def __init__(self, inner, delay: float = 0.02):
        super().__init__(inner)
        self._delay = delay

    def query(self, collection, filters):
        docs = self._inner.query(collection, filters)
        time.sleep(self._delay)
        return docs


@pytest.fixture
def failing_store() -> FailingDocumentStore:
    """Provide a store that always raises StoreConnectionError."""
    return FailingDocumentStore()


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def owner_locks() -> OwnerLockRegistry:
    """Provide a fresh lock registry per test."""
    return OwnerLockRegistry()


@pytest.fixture
def account_repo(document_store, owner_locks) -> AccountRepository:
    """Provide test AccountRepository."""
    return AccountRepository(document_store, locks=owner_locks)


@pytest.fixture
def account_service(account_repo) -> AccountService:
    """Provide test AccountService."""
    return AccountService(account_repo=account_repo)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts through the service."""

    def _create_account(
        name: str = "Everyday Checking",
        account_type: str = "checking",
        balance: Any = Decimal("0"),
        is_default: bool = False,
        owner_id: str = OWNER,
    ) -> Account:
        return account_service.create_account(
            owner_id,
            {
                "name": name,
                "type": account_type,
                "balance": balance,
                "is_default": is_default,
            },
        )

    return _create_account


def default_ids(repo: AccountRepository, owner_id: str = OWNER) -> list[str]:
    """Ids of the owner's active accounts flagged as default."""
    return [a.account_id for a in repo.list_active(owner_id) if a.is_default]


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def client(test_engine, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database."""
    set_settings(Settings(data_dir=tmp_path))
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
    reset_database()
    reset_settings()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers identifying the primary test user."""
    return {"X-User-Id": OWNER, "X-User-Email": "ada@example.com"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    """Headers identifying a second user."""
    return {"X-User-Id": OTHER_OWNER}
