from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the machine-checkable name of the error and ``status_code`` the
    HTTP status the controllers answer with.
    """

    kind = "DomainError"
    status_code = 400
    retryable = False


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    kind = "ValidationError"
    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced enrollment/class/student/record does not exist."""

    kind = "NotFoundError"
    status_code = 404


class ConflictError(DomainError):
    """Raised when the write would duplicate an existing record."""

    kind = "ConflictError"
    status_code = 409


class BusinessRuleViolation(DomainError):
    """Raised when a request is well-formed but a business rule forbids it."""

    kind = "BusinessRuleViolation"
    status_code = 400

    def __init__(self, message: str, *, rule: Optional[str] = None):
        super().__init__(message)
        self.rule = rule


class StorageUnavailableError(DomainError):
    """Raised on transient storage failures (network, timeout). Safe to retry."""

    kind = "StorageUnavailableError"
    status_code = 503
    retryable = True
