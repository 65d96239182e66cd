"""
Password recovery module.

Turns a password-reset link into a session and walks the user through
choosing a new password.

Public API:
- extract_recovery_intent: Parse recovery tokens out of a URL
- PasswordRecoveryController: Reset-password page state machine
- RecoveryIntent, RecoveryStatus, SubmissionOutcome: Data models
- Recovery exceptions: InvalidRecoveryLinkError, etc.
"""

from .controller import PasswordRecoveryController
from .extractor import describe_recovery_url, extract_recovery_intent
from .models import (
    ParamPresence,
    RecoveryIntent,
    RecoveryUrlReport,
    RecoveryState,
    RecoveryStatus,
    RecoveryView,
    SubmissionOutcome,
    TokenSource,
)
from .exceptions import (
    INVALID_LINK_MESSAGE,
    RecoveryError,
    InvalidRecoveryLinkError,
    SessionEstablishmentFailedError,
    PasswordPolicyViolationError,
    PasswordUpdateFailedError,
    RecoveryNotReadyError,
)

__all__ = [
    # Controller
    "PasswordRecoveryController",
    "extract_recovery_intent",
    "describe_recovery_url",
    # Models
    "ParamPresence",
    "RecoveryIntent",
    "RecoveryUrlReport",
    "RecoveryState",
    "RecoveryStatus",
    "RecoveryView",
    "SubmissionOutcome",
    "TokenSource",
    # Exceptions
    "INVALID_LINK_MESSAGE",
    "RecoveryError",
    "InvalidRecoveryLinkError",
    "SessionEstablishmentFailedError",
    "PasswordPolicyViolationError",
    "PasswordUpdateFailedError",
    "RecoveryNotReadyError",
]
