"""
Domain Exceptions

These exceptions represent business rule violations and domain-specific errors.
Use cases catch them and translate them into failed results for the caller.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "INVALID_DATETIME")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when input validation fails.

    Use for malformed timestamps, non-positive durations or counts, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


class DataIntegrityException(DomainException):
    """
    Raised when the remote store returns a record that cannot be trusted.

    Example: a completion echo without a real patient attached.
    """

    def __init__(self, message: str, entity_id: Any | None = None, reason: str | None = None):
        self.entity_id = entity_id
        self.reason = reason
        details: dict[str, Any] = {}
        if entity_id is not None:
            details["entity_id"] = str(entity_id)
        if reason:
            details["reason"] = reason
        super().__init__(message, "DATA_INTEGRITY_ERROR", details)
