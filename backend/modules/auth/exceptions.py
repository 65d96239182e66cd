"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the
presentation layer, which shows the message next to the relevant form.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ConflictError, ExternalServiceError


class InvalidCredentialsError(AuthenticationError):
    """Raised when the identity provider rejects an email/password pair."""

    def __init__(self, message: str = "Invalid credentials. Please try again."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a logged-in user and there is none."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class OperationInProgressError(ConflictError):
    """Raised when login/signup is invoked while another one is in flight."""

    def __init__(self, operation: str):
        super().__init__(
            f"Another {operation} is already in progress",
            code="OPERATION_IN_PROGRESS",
            details={"operation": operation},
        )


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider fails for a reason other than bad credentials."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(
            message,
            service="identity_provider",
            code="IDENTITY_PROVIDER_ERROR",
        )
        if operation:
            self.details["operation"] = operation
