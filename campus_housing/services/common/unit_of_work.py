"""
Unit of Work pattern implementation.

Provides transaction management and repository coordination
for the service layer with SQLAlchemy. Driver errors raised inside the
unit of work are translated into service errors on exit.
"""
from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Any, Callable, Optional, Type, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from campus_housing.repositories.base_repository import BaseRepository

from .errors import (
    AlreadyExistsError,
    ServiceError,
    StoreUnavailableError,
    TransactionConflictError,
)

logger = logging.getLogger(__name__)

TRepository = TypeVar("TRepository", bound=BaseRepository)

# serialization_failure, deadlock_detected, lock_not_available
RETRYABLE_PGCODES = frozenset({"40001", "40P01", "55P03"})
RETRYABLE_SQLITE_MESSAGES = ("database is locked", "database table is locked")


def is_retryable_db_error(exc: BaseException) -> bool:
    """Check whether a driver error is a lost lock or serialization race."""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    if getattr(orig, "pgcode", None) in RETRYABLE_PGCODES:
        return True
    message = str(orig).lower()
    return any(text in message for text in RETRYABLE_SQLITE_MESSAGES)


def translate_db_error(exc: SQLAlchemyError) -> ServiceError:
    """Map a SQLAlchemy error onto the service error taxonomy."""
    if is_retryable_db_error(exc):
        return TransactionConflictError(original_error=exc)
    if isinstance(exc, IntegrityError):
        return AlreadyExistsError("Record", "unique key", str(exc.orig).splitlines()[0])
    return StoreUnavailableError(original_error=exc)


class UnitOfWork(AbstractContextManager["UnitOfWork"]):
    """
    Unit of Work pattern for managing database transactions.

    Coordinates repositories and ensures atomic commits/rollbacks.

    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     rooms = uow.get_repo(RoomRepository)
        ...     room = rooms.get_by_number(dorm_id, "101", lock_for_update=True)
        ...     # Auto-commits on __exit__ if no exception

    Any exception rolls the transaction back. SQLAlchemy errors leave
    the context as ``TransactionConflictError``, ``AlreadyExistsError``
    or ``StoreUnavailableError`` chained to the original error.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """
        Initialize Unit of Work.

        Args:
            session_factory: Factory function that returns a new Session
        """
        self._session_factory = session_factory

        self.session: Optional[Session] = None
        self._committed: bool = False
        self._rolled_back: bool = False
        self._repo_cache: dict[Type[BaseRepository], BaseRepository] = {}

    # ------------------------------------------------------------------ #
    # Context manager protocol
    # ------------------------------------------------------------------ #

    def __enter__(self) -> "UnitOfWork":
        """Enter the context and initialize session."""
        if self.session is not None:
            raise RuntimeError("UnitOfWork context already entered")

        self.session = self._session_factory()
        self.session.autoflush = True
        self._committed = False
        self._rolled_back = False
        self._repo_cache.clear()

        logger.debug("UnitOfWork session started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Exit the context and handle transaction completion."""
        if self.session is None:
            return False

        try:
            if exc_type is None:
                if not self._committed and not self._rolled_back:
                    self.commit()
            else:
                if not self._rolled_back:
                    self._safe_rollback()
                    logger.warning(f"UnitOfWork rolled back due to {exc_type.__name__}")
                if isinstance(exc_val, SQLAlchemyError):
                    raise translate_db_error(exc_val) from exc_val
        finally:
            self.session.close()
            self.session = None
            self._repo_cache.clear()
            logger.debug("UnitOfWork session closed")

        # Propagate any exception
        return False

    # ------------------------------------------------------------------ #
    # Transaction control
    # ------------------------------------------------------------------ #

    def commit(self) -> None:
        """
        Explicitly commit the current transaction.

        Raises:
            RuntimeError: If called outside of context
            TransactionConflictError: If the commit lost a lock race
            StoreUnavailableError: If the commit failed otherwise
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.commit() called outside of context")

        if self._committed:
            logger.warning("commit() called on already-committed transaction")
            return

        if self._rolled_back:
            raise RuntimeError("Cannot commit a rolled-back transaction")

        try:
            self.session.commit()
            self._committed = True
            logger.debug("UnitOfWork committed")
        except SQLAlchemyError as exc:
            logger.error(f"Commit failed: {exc}")
            self._safe_rollback()
            raise translate_db_error(exc) from exc

    def rollback(self) -> None:
        """
        Explicitly roll back the current transaction.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.rollback() called outside of context")

        if self._rolled_back:
            logger.warning("rollback() called on already-rolled-back transaction")
            return

        try:
            self.session.rollback()
            self._rolled_back = True
            self._committed = False
            logger.debug("UnitOfWork explicitly rolled back")
        except SQLAlchemyError as exc:
            logger.error(f"Rollback failed: {exc}")
            raise StoreUnavailableError("Failed to rollback transaction", exc) from exc

    def _safe_rollback(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError as exc:
            logger.error(f"Rollback failed: {exc}")
        self._rolled_back = True
        self._committed = False

    # ------------------------------------------------------------------ #
    # Repository factory
    # ------------------------------------------------------------------ #

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """
        Get or create a repository instance bound to this UnitOfWork's session.

        Repositories are cached per UnitOfWork instance for consistency.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.get_repo() called outside of context")

        if repo_cls in self._repo_cache:
            return self._repo_cache[repo_cls]  # type: ignore

        repo_instance = repo_cls(self.session)
        self._repo_cache[repo_cls] = repo_instance

        logger.debug(f"Created repository: {repo_cls.__name__}")
        return repo_instance  # type: ignore

    # ------------------------------------------------------------------ #
    # Nested transactions (savepoints)
    # ------------------------------------------------------------------ #

    def nested(self) -> "NestedUnitOfWork":
        """
        Create a nested Unit of Work using a savepoint.

        Useful for partial rollbacks within a larger transaction, for
        example an insert that may lose a unique-key race.

        Raises:
            RuntimeError: If called outside of context
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.nested() called outside of context")

        return NestedUnitOfWork(self.session)


class NestedUnitOfWork(AbstractContextManager["NestedUnitOfWork"]):
    """
    Nested Unit of Work using SQLAlchemy savepoints.

    Allows partial transaction rollbacks within a parent UnitOfWork.
    Exceptions propagate unchanged so the caller can recover from them.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._savepoint: Optional[SessionTransaction] = None

    def __enter__(self) -> "NestedUnitOfWork":
        """Enter nested context and create savepoint."""
        self._savepoint = self.session.begin_nested()
        logger.debug("Nested UnitOfWork savepoint created")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        """Exit nested context and handle savepoint."""
        # Already closed by an explicit commit or rollback
        if self._savepoint is None or self.session.get_nested_transaction() is not self._savepoint:
            return False

        if exc_type is None:
            self._savepoint.commit()
            logger.debug("Nested UnitOfWork savepoint committed")
        else:
            self._savepoint.rollback()
            logger.warning(f"Nested UnitOfWork savepoint rolled back due to {exc_type.__name__}")

        # Propagate exception
        return False

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """Get repository bound to the nested session."""
        return repo_cls(self.session)
