"""Common service-layer building blocks: errors, unit of work, retries."""

from .errors import (
    AlreadyExistsError,
    BusinessRuleViolation,
    ErrorCode,
    ExternalServiceError,
    InsufficientBalanceError,
    NotFoundError,
    RoomFullError,
    RoomNotFoundError,
    ServiceError,
    StoreUnavailableError,
    StudentAlreadyAssignedError,
    StudentCardNotFoundError,
    StudentNotFoundError,
    TransactionConflictError,
    ValidationError,
)
from .transaction import run_in_transaction
from .unit_of_work import NestedUnitOfWork, UnitOfWork

__all__ = [
    "AlreadyExistsError",
    "BusinessRuleViolation",
    "ErrorCode",
    "ExternalServiceError",
    "InsufficientBalanceError",
    "NotFoundError",
    "RoomFullError",
    "RoomNotFoundError",
    "ServiceError",
    "StoreUnavailableError",
    "StudentAlreadyAssignedError",
    "StudentCardNotFoundError",
    "StudentNotFoundError",
    "TransactionConflictError",
    "ValidationError",
    "run_in_transaction",
    "NestedUnitOfWork",
    "UnitOfWork",
]
