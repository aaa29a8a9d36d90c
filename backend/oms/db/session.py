"""
Database Session Management Module
==================================

Responsible for:
- Creating the database engine
- Managing session lifecycle
- Providing the session dependency for FastAPI routes
- Creating tables on startup when no migration tool manages them
"""

from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session

from oms.core.config import settings
from oms.core.logging import get_logger
from oms.db.base import Base

# Initialize logger
logger = get_logger(__name__)


# ==========================
# Database Engine
# ==========================

def _engine_options(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 1800,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    **_engine_options(settings.DATABASE_URL),
)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection, connection_record):
    """Enable foreign keys on SQLite and log new connections."""
    if settings.DATABASE_URL.startswith("sqlite"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    logger.debug("db_connection_established")


# ==========================
# Session Factory
# ==========================

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


# ==========================
# Dependency for FastAPI
# ==========================

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Ensures:
    - Session is opened per request
    - Session is properly closed after request completes
    - Transactions are rolled back on error

    Yields:
        SQLAlchemy Session object

    Usage:
        @router.get("/orders")
        def list_orders(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error("db_session_error", error=str(e))
        db.rollback()
        raise
    finally:
        db.close()


# ==========================
# Schema & Health
# ==========================

def init_db() -> None:
    """Create all tables registered on the declarative Base."""
    # Register models on the metadata
    from oms import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("db_tables_ready", tables=sorted(Base.metadata.tables))


def check_database_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("db_health_check_failed", error=str(e))
        return False
