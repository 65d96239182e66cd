"""
Password Recovery Controller.

Drives the reset-password page:

    CHECKING ──existing session──────────────► READY ──update ok──► COMPLETED
        │                                        ▲  │
        ├──tokens in URL──establish ok───────────┘  └──update failed──► READY
        │
        └──no tokens / establish failed──► REJECTED

Every failure is caught here and recorded on the status snapshot.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import StudexError
from modules.auth.interfaces import IIdentityProvider

from .exceptions import (
    InvalidRecoveryLinkError,
    PasswordPolicyViolationError,
    PasswordUpdateFailedError,
    RecoveryNotReadyError,
    SessionEstablishmentFailedError,
)
from .extractor import extract_recovery_intent
from .models import RecoveryState, RecoveryStatus, RecoveryView, SubmissionOutcome

logger = logging.getLogger(__name__)

_VIEWS = {
    RecoveryState.CHECKING: RecoveryView.SPINNER,
    RecoveryState.READY: RecoveryView.PASSWORD_FORM,
    RecoveryState.REJECTED: RecoveryView.ERROR_PANEL,
    RecoveryState.COMPLETED: RecoveryView.CONFIRMATION,
}

DEFAULT_UPDATE_ERROR = "Failed to reset password. Please try again."


class PasswordRecoveryController:
    """
    One controller per page load.

    Call start() once, then submit() any number of times while the
    state is READY. Callers must await each call before making the next.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        url: str,
        settings: Optional[Settings] = None,
    ):
        self._provider = provider
        self._url = url
        self._settings = settings or get_settings()
        self._state = RecoveryState.CHECKING
        self._error: Optional[StudexError] = None
        self._started = False
        self._submitting = False

    @property
    def state(self) -> RecoveryState:
        return self._state

    @property
    def status(self) -> RecoveryStatus:
        return RecoveryStatus(
            state=self._state,
            view=_VIEWS[self._state],
            error=self._error.message if self._error else None,
            error_code=self._error.code if self._error else None,
            submitting=self._submitting,
        )

    def _reject(self, error: StudexError) -> None:
        self._state = RecoveryState.REJECTED
        self._error = error
        logger.debug(f"Recovery rejected: {error.code}")

    async def start(self) -> RecoveryStatus:
        """
        Find a session that is allowed to change the password.

        An existing provider session wins outright; the URL is only
        consulted when there is none.
        """
        if self._started:
            return self.status
        self._started = True

        try:
            existing = await self._provider.get_current_session()
        except Exception as e:
            logger.warning(f"Session lookup failed during recovery: {e}")
            self._reject(SessionEstablishmentFailedError(str(e)))
            return self.status

        if existing is not None:
            logger.debug("Existing session found, skipping recovery tokens")
            self._state = RecoveryState.READY
            return self.status

        intent = extract_recovery_intent(self._url)
        if intent is None:
            self._reject(InvalidRecoveryLinkError())
            return self.status

        logger.debug(f"Recovery tokens found in URL {intent.source.value}")
        try:
            await self._provider.establish_session_from_tokens(
                intent.access_token,
                intent.refresh_token,
            )
        except Exception as e:
            logger.warning(f"Could not establish recovery session: {e}")
            self._reject(SessionEstablishmentFailedError(str(e)))
            return self.status

        self._state = RecoveryState.READY
        return self.status

    def _check_policy(self, password: str, confirm_password: str) -> None:
        min_length = self._settings.password_min_length
        if len(password) < min_length:
            raise PasswordPolicyViolationError(
                f"Password must be at least {min_length} characters long.",
                field="password",
            )
        if password != confirm_password:
            raise PasswordPolicyViolationError(
                "Passwords do not match.",
                field="confirm_password",
            )

    async def submit(self, password: str, confirm_password: str) -> SubmissionOutcome:
        """
        Validate and submit a new password.

        Local checks run first and never reach the provider. A provider
        failure keeps the controller READY so the user can retry.

        Raises:
            RecoveryNotReadyError: If the state is not READY or a
                submission is already in flight
        """
        if self._submitting:
            raise RecoveryNotReadyError("submitting")
        if self._state != RecoveryState.READY:
            raise RecoveryNotReadyError(self._state.value)

        self._error = None
        try:
            self._check_policy(password, confirm_password)
        except PasswordPolicyViolationError as e:
            self._error = e
            return SubmissionOutcome(
                accepted=False,
                error=e.message,
                error_code=e.code,
                field=e.field,
            )

        self._submitting = True
        try:
            await self._provider.update_password(password)
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or DEFAULT_UPDATE_ERROR
            self._error = PasswordUpdateFailedError(message)
            logger.warning(f"Password update failed: {message}")
            return SubmissionOutcome(
                accepted=False,
                error=self._error.message,
                error_code=self._error.code,
            )
        finally:
            self._submitting = False

        self._state = RecoveryState.COMPLETED
        logger.info("Password reset completed")
        return SubmissionOutcome(accepted=True)
