"""
Credential Session Manager.

Runs login, signup and logout against the identity provider and keeps
the Session Store in sync. This is the only code that writes the
persisted identity.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.storage import IKeyValueStore, JsonFileStore

from .interfaces import IIdentityProvider, ISessionManager
from .models import AuthSession, Identity, ProfileFields, ProfileUpdate, Session
from .exceptions import (
    IdentityProviderError,
    NotAuthenticatedError,
    OperationInProgressError,
)
from .provider import get_identity_provider
from .rules import format_display_name, is_academic_email
from .store import SessionStore

logger = logging.getLogger(__name__)


class SessionManager(ISessionManager):
    """
    Implementation of the session manager.

    The store is rehydrated from durable storage when the manager is
    built, so the first snapshot a caller sees already reflects any
    previous login.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        storage: IKeyValueStore,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._provider = provider
        self._store = SessionStore(storage, self._settings.session_storage_key)

    @property
    def session(self) -> Session:
        return self._store.session

    def _is_verified(self, email: Optional[str]) -> bool:
        return is_academic_email(
            email,
            self._settings.academic_email_suffixes,
            self._settings.academic_email_patterns,
        )

    async def login(self, email: str, password: str) -> Session:
        """
        Log in with email and password.

        On any failure the previous session is kept as it was. Provider
        errors propagate, and a failed write raises StorageError.
        """
        if self._store.loading:
            raise OperationInProgressError("login")

        self._store.begin_transition()
        try:
            auth = await self._provider.sign_in_with_password(email, password)
            identity = self._identity_from_login(auth, email)
            self._store.commit(identity)
        finally:
            self._store.end_transition()

        logger.info(f"User {identity.id} logged in")
        return self._store.session

    def _identity_from_login(self, auth: AuthSession, email: str) -> Identity:
        address = auth.email or email
        return Identity(
            id=auth.user_id,
            name=format_display_name(None, address),
            email=address,
            is_verified=self._is_verified(address),
            created_at=datetime.now(timezone.utc),
        )

    async def signup(self, profile: ProfileFields, password: str) -> Session:
        """
        Create an account from signup form fields.

        Omitted fields fall back to empty strings and year 1. The
        verified flag is computed here, once, from the email.
        """
        if self._store.loading:
            raise OperationInProgressError("signup")

        self._store.begin_transition()
        try:
            auth = await self._provider.sign_up(profile.email or "", password)
            identity = Identity(
                id=auth.user_id,
                name=profile.name or "",
                email=profile.email or "",
                institution=profile.institution or "",
                field_of_study=profile.field_of_study or "",
                year=profile.year or 1,
                bio=profile.bio or "",
                is_verified=self._is_verified(profile.email),
                created_at=datetime.now(timezone.utc),
            )
            self._store.commit(identity)
        finally:
            self._store.end_transition()

        logger.info(f"User {identity.id} signed up (verified={identity.is_verified})")
        return self._store.session

    def logout(self) -> None:
        """Clear the current identity and its persisted copy."""
        if self._store.identity is not None:
            logger.info(f"User {self._store.identity.id} logged out")
        self._store.clear()

    async def sign_out_remote(self) -> None:
        """
        Log out locally, then end the provider session.

        A provider failure is logged; the local logout still stands.
        """
        self.logout()
        try:
            await self._provider.sign_out()
        except IdentityProviderError as e:
            logger.warning(f"Provider sign-out failed: {e.message}")

    def update_profile(self, updates: ProfileUpdate) -> Session:
        """Merge editable profile fields into the current identity."""
        identity = self._store.identity
        if identity is None:
            raise NotAuthenticatedError()

        changes = updates.model_dump(exclude_none=True)
        if not changes:
            return self._store.session

        return self._store.commit(identity.model_copy(update=changes))

    async def request_password_reset(self, email: str) -> None:
        """Send a reset link that lands on the configured reset page."""
        if not email or not email.strip():
            raise ValidationError("Email is required", code="EMAIL_REQUIRED")

        await self._provider.send_password_reset(
            email.strip(),
            self._settings.password_reset_redirect_url,
        )
        logger.info("Password reset requested")


# Verify the implementation satisfies the interface
def _verify_interface():
    """Type check that SessionManager implements ISessionManager."""
    manager: ISessionManager = get_session_manager()
    return manager


# Module-level instance getter
_manager_instance: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """Get the session manager singleton."""
    global _manager_instance
    if _manager_instance is None:
        settings = get_settings()
        _manager_instance = SessionManager(
            provider=get_identity_provider(),
            storage=JsonFileStore(settings.session_storage_path),
            settings=settings,
        )
    return _manager_instance


def reset_session_manager() -> None:
    """Reset the session manager singleton (for testing)."""
    global _manager_instance
    _manager_instance = None
