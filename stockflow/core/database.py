"""
Database wiring - engine, session factory and the stock transaction boundary.

Nothing here is created at import time: the application factory builds the
engine and session factory and keeps them on ``app.state`` so that tests and
scripts can hand in their own.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import Settings, get_settings
from .exceptions import StockFlowError, TransactionFailure

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def create_db_engine(settings: Settings, **kwargs) -> Engine:
    """Create the SQLAlchemy engine for the configured database"""
    connect_args = kwargs.pop("connect_args", {})
    url = kwargs.pop("url", settings.DATABASE_URL)
    if url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    else:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_timeout", settings.TRANSACTION_MAX_WAIT_MS / 1000)

    engine = create_engine(url, connect_args=connect_args, echo=settings.DEBUG, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores foreign keys unless asked per connection
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine, settings: Optional[Settings] = None) -> sessionmaker:
    """Sessions carry the settings they were built with in ``session.info``"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, info={"settings": settings})


# Dependency for FastAPI
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session, settings: Optional[Settings] = None) -> Iterator[Session]:
    """
    Run a block of stock mutations as one transaction.

    On PostgreSQL the lock wait and the statement execution are bounded by
    TRANSACTION_MAX_WAIT_MS / TRANSACTION_TIMEOUT_MS, taken from ``settings``
    or else from the settings the session factory was built with. Commits on
    success, rolls back on any exception.
    """
    settings = settings or db.info.get("settings") or get_settings()
    if db.get_bind().dialect.name == "postgresql":
        db.execute(text(f"SET LOCAL lock_timeout = {int(settings.TRANSACTION_MAX_WAIT_MS)}"))
        db.execute(text(f"SET LOCAL statement_timeout = {int(settings.TRANSACTION_TIMEOUT_MS)}"))
    try:
        yield db
        db.commit()
    except StockFlowError:
        db.rollback()
        raise
    except OperationalError as e:
        db.rollback()
        logger.error(f"Stock transaction aborted: {e.orig}")
        raise TransactionFailure("Transaction timed out or could not acquire locks", retryable=True) from e
    except DBAPIError as e:
        db.rollback()
        logger.error(f"Stock transaction failed: {e.orig}")
        raise TransactionFailure("Transaction could not be committed") from e
    except Exception:
        db.rollback()
        raise
