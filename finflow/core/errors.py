"""
Error taxonomy.

Every failure a service can report carries an ErrorKind. The HTTP layer
maps kinds to status codes (see finflow.api.errors) and never inspects
message text. Messages are curated and safe to show to clients.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    UNAUTHENTICATED = "unauthenticated"  # No, invalid or expired credential
    FORBIDDEN = "forbidden"              # Valid identity, wrong owner
    NOT_FOUND = "not_found"              # No such record
    INVALID_INPUT = "invalid_input"      # Malformed payload, bad enum, rule violation
    CONFLICT = "conflict"                # Uniqueness violation in storage
    INTERNAL = "internal"                # Anything unexpected


class FinFlowError(Exception):
    """Base exception for all domain and service errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(FinFlowError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"


class ForbiddenError(FinFlowError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You do not have permission to access this resource"


class NotFoundError(FinFlowError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class InvalidInputError(FinFlowError):
    """Payload failed validation. `field` names the offending field, if known."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid request"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidTypeError(InvalidInputError):
    """An enumerated `type` value is out of range."""

    default_message = "Invalid type"

    def __init__(self, message: str | None = None):
        super().__init__(message, field="type")


class InvalidCurrencyError(InvalidInputError):
    default_message = "Invalid currency code"

    def __init__(self, message: str | None = None):
        super().__init__(message, field="currency")


class ConflictError(FinFlowError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class InternalError(FinFlowError):
    kind = ErrorKind.INTERNAL
