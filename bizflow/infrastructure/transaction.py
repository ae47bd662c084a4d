"""Transaction Scope - SQLAlchemy session per transaction, with a rollback-only flag.

Invariants:
    - Every scope ends in exactly one of commit / rollback, and the session is always closed
    - Rollback when the scope was marked rollback-only OR an exception escaped
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - mark_rollback_only() on a finished scope is a caller error (RuntimeError)

Design Decisions:
    - TransactionScope implements core TransactionSignal: the orchestrator receives the
      scope by injection and can only mark it, never commit or roll back
    - pool_pre_ping for stale connection detection; pool sizing skipped for SQLite
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker

from bizflow.config import Settings
from bizflow.core.domain_types import ModuleId
from bizflow.core.errors import DatabaseError

logger = logging.getLogger(__name__)

TRANSACTION_MODULE = ModuleId("bizflow.transaction")


class TransactionScope:
    """Handle on one active transaction; exposes the rollback-only signal."""

    def __init__(self, session: Session):
        self.session = session
        self._rollback_only = False
        self._active = True

    @property
    def is_rollback_only(self) -> bool:
        return self._rollback_only

    @property
    def is_active(self) -> bool:
        return self._active

    def mark_rollback_only(self) -> None:
        if not self._active:
            raise RuntimeError("No active transaction to mark rollback-only")
        self._rollback_only = True

    def _finish(self) -> None:
        self._active = False


class TransactionManager:
    """Owns the engine and hands out transaction scopes."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_engine(database_url, **engine_kwargs)
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionManager":
        return cls(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @contextmanager
    def transaction(self) -> Iterator[TransactionScope]:
        """Commit on clean exit unless marked rollback-only; roll back otherwise."""
        session = self._session_factory()
        scope = TransactionScope(session)
        try:
            yield scope
            if scope.is_rollback_only:
                session.rollback()
                logger.info("Transaction rolled back (rollback-only)")
            else:
                session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError(
                TRANSACTION_MODULE, "Integrity constraint violated", "commit", cause=e,
            )
        except OperationalError as e:
            session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError(
                TRANSACTION_MODULE, "Connection or operational error", "execute", cause=e,
            )
        except DBAPIError as e:
            session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError(
                TRANSACTION_MODULE, "Database driver error", "query", cause=e,
            )
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError(
                TRANSACTION_MODULE, "Database operation failed", "unknown", cause=e,
            )
        except BaseException:
            session.rollback()
            raise
        finally:
            scope._finish()
            session.close()

    def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            with self.transaction() as scope:
                scope.session.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
