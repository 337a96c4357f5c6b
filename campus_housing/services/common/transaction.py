"""
Retry helper for transactional service operations.

An operation that loses a lock race is re-run from the start in a fresh
unit of work. Business errors are never retried.
"""
from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from campus_housing.config.settings import settings

from .errors import TransactionConflictError
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(
    session_factory: Callable[[], Session],
    work: Callable[[UnitOfWork], T],
    *,
    max_attempts: Optional[int] = None,
    backoff: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run ``work`` inside a unit of work, retrying on transaction conflicts.

    Args:
        session_factory: Factory for new sessions
        work: Callable receiving the active UnitOfWork
        max_attempts: Attempts before giving up, defaults to ``TX_MAX_ATTEMPTS``
        backoff: Base delay in seconds, defaults to ``TX_RETRY_BACKOFF_SECONDS``
        sleep: Delay function

    Returns:
        Whatever ``work`` returns; the transaction has been committed

    Raises:
        TransactionConflictError: If every attempt lost a lock race
    """
    attempts = max_attempts or settings.TX_MAX_ATTEMPTS
    base_delay = settings.TX_RETRY_BACKOFF_SECONDS if backoff is None else backoff

    for attempt in range(1, attempts + 1):
        try:
            with UnitOfWork(session_factory) as uow:
                return work(uow)
        except TransactionConflictError as exc:
            if attempt >= attempts:
                logger.error(
                    "Transaction failed after retries",
                    extra={"attempts": attempt, "operation": getattr(work, "__name__", repr(work))},
                )
                raise
            delay = base_delay * (2 ** (attempt - 1)) * (0.5 + random.random())
            logger.warning(
                f"Transaction conflict on attempt {attempt}/{attempts}, retrying in {delay:.3f}s",
                extra={"error_type": exc.details.get("error_type")},
            )
            sleep(delay)

    raise TransactionConflictError()
