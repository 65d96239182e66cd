"""
Password recovery exceptions.

The controller catches these at its own boundary and records them on
its status, so the presentation layer reads them rather than catching
them. RecoveryNotReadyError is the exception: it signals a caller bug
and is raised.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ConflictError, StudexError, ValidationError


INVALID_LINK_MESSAGE = "Invalid or expired reset link. Please request a new password reset."


class RecoveryError(StudexError):
    """
    Base exception for password recovery errors.

    Subclasses also derive from the shared category (validation,
    authentication, conflict) that describes them.
    """

    pass


class InvalidRecoveryLinkError(RecoveryError, AuthenticationError):
    """No usable recovery tokens in the URL and no existing session."""

    def __init__(self):
        super().__init__(INVALID_LINK_MESSAGE, code="INVALID_RECOVERY_LINK")


class SessionEstablishmentFailedError(RecoveryError, AuthenticationError):
    """
    The identity provider rejected the recovery tokens.

    Shows the same message as InvalidRecoveryLinkError so users can't
    tell a malformed token from an expired one.
    """

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            INVALID_LINK_MESSAGE,
            code="SESSION_ESTABLISHMENT_FAILED",
            details={"reason": reason} if reason else {},
        )


class PasswordPolicyViolationError(RecoveryError, ValidationError):
    """The new password failed a local check."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message,
            code="PASSWORD_POLICY_VIOLATION",
            details={"field": field},
        )
        self.field = field


class PasswordUpdateFailedError(RecoveryError):
    """The identity provider refused the password change."""

    def __init__(self, message: str):
        super().__init__(message, code="PASSWORD_UPDATE_FAILED")


class RecoveryNotReadyError(RecoveryError, ConflictError):
    """A submission arrived while the controller could not accept one."""

    def __init__(self, state: str):
        super().__init__(
            f"Cannot submit a new password while recovery is {state}",
            code="RECOVERY_NOT_READY",
            details={"state": state},
        )
