"""
Service-layer exceptions.

These exceptions are raised by service methods and are rendered by the
API layer as JSON error responses. Each error carries an ``ErrorCode``
and the HTTP status it maps to.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID


class ErrorCode(str, Enum):
    """Standard error codes for service operations."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Business logic errors
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    STUDENT_ALREADY_ASSIGNED = "STUDENT_ALREADY_ASSIGNED"
    STUDENT_CARD_NOT_FOUND = "STUDENT_CARD_NOT_FOUND"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"

    # Store errors
    TRANSACTION_CONFLICT = "TRANSACTION_CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(
        self,
        resource_type: str,
        identifier: UUID | str | int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class AlreadyExistsError(ServiceError):
    """Raised when attempting to create a resource that already exists."""

    code = ErrorCode.ALREADY_EXISTS
    status_code = 409

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: Any,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with {field}='{value}' already exists"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.field = field
        self.value = value


class ValidationError(ServiceError):
    """Raised when business logic validation fails."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class BusinessRuleViolation(ServiceError):
    """Raised when a business rule is violated."""

    code = ErrorCode.BUSINESS_RULE_VIOLATION
    status_code = 409

    def __init__(
        self,
        rule_name: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.rule_name = rule_name


# --------------------------------------------------------------------------- #
# Housing errors
# --------------------------------------------------------------------------- #


class RoomNotFoundError(NotFoundError):
    code = ErrorCode.ROOM_NOT_FOUND

    def __init__(self, identifier: UUID | str, dorm_id: UUID | str | None = None) -> None:
        details = {"dorm_id": str(dorm_id)} if dorm_id is not None else None
        super().__init__("Room", identifier, details)


class StudentNotFoundError(NotFoundError):
    code = ErrorCode.STUDENT_NOT_FOUND

    def __init__(self, identifier: UUID | str) -> None:
        super().__init__("Student", identifier)


class StudentCardNotFoundError(NotFoundError):
    code = ErrorCode.STUDENT_CARD_NOT_FOUND

    def __init__(self, username: str) -> None:
        super().__init__("StudentCard", username)


class RoomFullError(BusinessRuleViolation):
    """Raised when a room already holds ``capacity`` students."""

    code = ErrorCode.ROOM_FULL

    def __init__(self, room_id: str, capacity: int) -> None:
        super().__init__(
            "room_capacity",
            f"Room {room_id} is full (capacity {capacity})",
            {"room_id": room_id, "capacity": capacity},
        )


class StudentAlreadyAssignedError(BusinessRuleViolation):
    """Raised when a student who already has a room is assigned again."""

    code = ErrorCode.STUDENT_ALREADY_ASSIGNED

    def __init__(self, student_id: str, room_id: str) -> None:
        super().__init__(
            "single_room_per_student",
            f"Student {student_id} is already assigned to room {room_id}",
            {"student_id": student_id, "room_id": room_id},
        )


class InsufficientBalanceError(BusinessRuleViolation):
    code = ErrorCode.INSUFFICIENT_BALANCE

    def __init__(self, username: str, balance: Decimal, delta: Decimal) -> None:
        super().__init__(
            "non_negative_balance",
            f"Balance of card for '{username}' would become negative",
            {"balance": str(balance), "delta": str(delta)},
        )


class TransactionConflictError(ServiceError):
    """
    Raised when a transaction loses a lock or serialization race.

    The whole operation may be retried from the start.
    """

    code = ErrorCode.TRANSACTION_CONFLICT
    status_code = 503
    retryable = True

    def __init__(self, message: str = "Transaction conflict, retry the operation",
                 original_error: Optional[Exception] = None) -> None:
        details = {"error_type": type(original_error).__name__} if original_error else None
        super().__init__(message, details)
        self.original_error = original_error


class StoreUnavailableError(ServiceError):
    """Raised when the database fails for reasons other than contention."""

    code = ErrorCode.STORE_UNAVAILABLE
    status_code = 500

    def __init__(self, message: str = "Database unavailable",
                 original_error: Optional[Exception] = None) -> None:
        details = {"error_type": type(original_error).__name__} if original_error else None
        super().__init__(message, details)
        self.original_error = original_error


class ExternalServiceError(ServiceError):
    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502
