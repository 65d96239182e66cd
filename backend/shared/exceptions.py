"""
Base exception classes for the Studex identity backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class StudexError(Exception):
    """
    Base exception for all Studex errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for presentation layers."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StudexError):
    """Input validation failed."""

    pass


class AuthenticationError(StudexError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ConflictError(StudexError):
    """Operation conflicts with the current state (e.g. already in flight)."""

    pass


class ExternalServiceError(StudexError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StorageError(StudexError):
    """Persisted client state could not be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            code="STORAGE_ERROR",
            details={"path": path} if path else {},
        )
