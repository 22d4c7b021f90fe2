"""Error kinds raised by the services.

Services raise a ``ServiceError`` carrying an ``ErrorKind``; the API layer maps
the kind to an HTTP status in one place (see ``api/errors.py``). Callers branch
on ``err.kind`` instead of matching message text.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class ValidationError(ServiceError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid input"


class DuplicateEmail(ServiceError):
    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "User already exists"


class InvalidCredentials(ServiceError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class InvalidToken(ServiceError):
    kind = ErrorKind.INVALID_TOKEN
    default_message = "Invalid or expired token"


class Forbidden(ServiceError):
    kind = ErrorKind.FORBIDDEN
    default_message = "User not authorized"


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"
