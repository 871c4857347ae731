from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid, before any backend request is made."""


class AuthenticationError(DomainError):
    """Raised when sign-in or sign-up is rejected."""


class AuthorizationError(DomainError):
    """Raised when a teacher acts on data outside their classes."""


class StorageError(DomainError):
    """Raised when the data backend rejects a request or cannot be reached."""

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.code = code
