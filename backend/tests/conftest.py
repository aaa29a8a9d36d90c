"""
Test Configuration and Fixtures
================================

Central configuration for pytest with all shared fixtures.

Features:
- SQLite in-memory database for testing
- TestClient setup with database dependency override
- One account, token and header fixture per role
- Sample enriched orders
"""

import os
from datetime import datetime, timedelta, UTC
from typing import Callable, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Set testing environment before importing application modules
os.environ["ENVIRONMENT"] = "testing"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-min-32-chars"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_FORMAT"] = "console"

from oms.db.base import Base
from oms.db.session import get_db
from oms.core.enums import UserType
from oms.models import EnrichedOrder, Fitter, Role, User
from oms.services.auth_service import AuthService
from oms.main import app as main_app


TEST_PASSWORD = "TestPassword123!"
TEST_PASSWORD_HASH = AuthService.hash_password(TEST_PASSWORD)


# =====================================
# Database Configuration
# =====================================

# StaticPool keeps the same connection across the session
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)


# =====================================
# Database Fixtures
# =====================================

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    Creates all tables before each test and drops them after.

    Yields:
        SQLAlchemy Session object
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a TestClient with database dependency override.

    Args:
        db_session: Database session fixture

    Yields:
        TestClient instance
    """
    def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db

    with TestClient(main_app) as test_client:
        yield test_client

    main_app.dependency_overrides.clear()


# =====================================
# Account Fixtures
# =====================================

def create_account(
    db: Session,
    username: str,
    user_type: Optional[int] = None,
    is_supervisor: bool = False,
    fitter_name: Optional[str] = None,
    is_active: bool = True,
) -> User:
    """Persist an account, optionally with a fitter profile."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=TEST_PASSWORD_HASH,
        user_type=user_type,
        is_supervisor=is_supervisor,
        is_active=is_active,
    )
    db.add(user)
    db.flush()

    if fitter_name:
        db.add(Fitter(user_id=user.id, name=fitter_name))

    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def supervisor_user(db_session: Session) -> User:
    """Admin account type with the supervisor flag set."""
    return create_account(
        db_session, "testsupervisor", user_type=UserType.ADMIN, is_supervisor=True
    )


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """Admin account type."""
    return create_account(db_session, "laurengilbert", user_type=UserType.ADMIN)


@pytest.fixture
def fitter_user(db_session: Session) -> User:
    """Fitter account type with a fitter profile."""
    return create_account(
        db_session, "jane.fitter", user_type=UserType.FITTER, fitter_name="Jane Fitter"
    )


@pytest.fixture
def supplier_user(db_session: Session) -> User:
    """Factory account type."""
    return create_account(db_session, "testsupplier", user_type=UserType.FACTORY)


@pytest.fixture
def plain_user(db_session: Session) -> User:
    """Account with no type and no fitter profile."""
    return create_account(db_session, "testuser")


@pytest.fixture
def inactive_user(db_session: Session) -> User:
    """Disabled account."""
    return create_account(db_session, "disabled.user", is_active=False)


# =====================================
# Token Fixtures
# =====================================

def token_for(user_id: int, username: Optional[str], role: Role, **kwargs) -> str:
    """Access token for an arbitrary principal."""
    return AuthService.create_access_token(
        user_id=user_id,
        username=username,
        role=role,
        **kwargs,
    )


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[..., Dict[str, str]]:
    """Factory for Authorization headers for any role."""
    def _headers(role: Role, username: Optional[str] = "someone", user_id: int = 99) -> Dict[str, str]:
        return bearer(token_for(user_id, username, role))
    return _headers


@pytest.fixture
def supervisor_headers(supervisor_user: User) -> Dict[str, str]:
    return bearer(token_for(supervisor_user.id, supervisor_user.username, Role.SUPERVISOR))


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    return bearer(token_for(admin_user.id, admin_user.username, Role.ADMIN))


@pytest.fixture
def fitter_headers(fitter_user: User) -> Dict[str, str]:
    return bearer(token_for(fitter_user.id, fitter_user.username, Role.FITTER))


@pytest.fixture
def supplier_headers(supplier_user: User) -> Dict[str, str]:
    return bearer(token_for(supplier_user.id, supplier_user.username, Role.SUPPLIER))


@pytest.fixture
def user_headers(plain_user: User) -> Dict[str, str]:
    return bearer(token_for(plain_user.id, plain_user.username, Role.USER))


# =====================================
# Order Fixtures
# =====================================

@pytest.fixture
def sample_orders(db_session: Session) -> list:
    """
    Five orders across two fitters, oldest first.

    Returns:
        List of EnrichedOrder instances
    """
    base = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
    rows = [
        (1001, "pending", "Alice Rider", "Jane Fitter", "jane.fitter", "Acme Saddlery", False),
        (1002, "approved", "Bob Horseman", "Bob Fitter", "bob.fitter", "Acme Saddlery", True),
        (1003, "in_production", "Carla Stable", "Jane Fitter", "jane.fitter", "Northern Leather", False),
        (1004, "shipped", "Dan Pony", "Bob Fitter", "bob.fitter", "Northern Leather", False),
        (1005, "pending", "Alice Rider", "Jane Fitter", "jane.fitter", "Acme Saddlery", True),
    ]

    orders = []
    for offset, (order_id, status, customer, fitter, fitter_username, supplier, urgent) in enumerate(rows):
        order = EnrichedOrder(
            order_id=order_id,
            order_status=status,
            customer_name=customer,
            fitter_name=fitter,
            fitter_username=fitter_username,
            supplier_name=supplier,
            urgent=urgent,
            created_at=base + timedelta(days=offset),
        )
        db_session.add(order)
        orders.append(order)

    db_session.commit()
    return orders
