"""
Identity provider implementations.

SupabaseIdentityProvider talks to Supabase Auth. SimulatedIdentityProvider
accepts everything after a fixed delay; it backs local development and
mirrors the mock flows the web client shipped with.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional

from supabase import Client

from shared.config import get_settings
from shared.database import get_supabase_client

from .interfaces import IIdentityProvider
from .models import AuthSession
from .exceptions import IdentityProviderError, InvalidCredentialsError

logger = logging.getLogger(__name__)

# Supabase Auth error codes that mean "wrong email or password"
_INVALID_CREDENTIAL_CODES = {"invalid_credentials", "invalid_grant"}


def _to_auth_session(session: Any) -> AuthSession:
    user = session.user
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user_id=str(user.id),
        email=user.email,
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by the Supabase Auth client.

    Every client error is treated as opaque and wrapped in
    IdentityProviderError with the provider's message preserved.
    """

    def __init__(self, client: Client):
        self._client = client

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            if getattr(e, "code", None) in _INVALID_CREDENTIAL_CODES:
                raise InvalidCredentialsError() from e
            raise IdentityProviderError(str(e), operation="sign_in") from e

        if response.session is None:
            raise InvalidCredentialsError()
        return _to_auth_session(response.session)

    async def sign_up(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise IdentityProviderError(str(e), operation="sign_up") from e

        if response.session is not None:
            return _to_auth_session(response.session)
        if response.user is None:
            raise IdentityProviderError("Failed to create account", operation="sign_up")

        # Email confirmation pending: the account exists but has no tokens yet
        return AuthSession(
            access_token="",
            refresh_token="",
            user_id=str(response.user.id),
            email=response.user.email,
        )

    async def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as e:
            raise IdentityProviderError(str(e), operation="sign_out") from e

    async def get_current_session(self) -> Optional[AuthSession]:
        try:
            session = self._client.auth.get_session()
        except Exception as e:
            raise IdentityProviderError(str(e), operation="get_session") from e
        return _to_auth_session(session) if session else None

    async def establish_session_from_tokens(
        self,
        access_token: str,
        refresh_token: str,
    ) -> AuthSession:
        try:
            response = self._client.auth.set_session(access_token, refresh_token)
        except Exception as e:
            raise IdentityProviderError(str(e), operation="set_session") from e

        if response.session is None:
            raise IdentityProviderError("No session returned", operation="set_session")
        return _to_auth_session(response.session)

    async def update_password(self, new_password: str) -> None:
        try:
            self._client.auth.update_user({"password": new_password})
        except Exception as e:
            raise IdentityProviderError(str(e), operation="update_password") from e

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        try:
            self._client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except Exception as e:
            raise IdentityProviderError(str(e), operation="reset_password") from e


class SimulatedIdentityProvider(IIdentityProvider):
    """
    In-process stand-in for the hosted identity service.

    Every call waits `delay` seconds and succeeds. Recovery tokens are
    accepted as long as both are non-empty.
    """

    def __init__(self, delay: float = 1.0):
        self._delay = delay
        self._session: Optional[AuthSession] = None

    def _issue(self, email: Optional[str], user_id: Optional[str] = None) -> AuthSession:
        return AuthSession(
            access_token=f"sim-access-{uuid.uuid4().hex}",
            refresh_token=f"sim-refresh-{uuid.uuid4().hex}",
            user_id=user_id or str(uuid.uuid4()),
            email=email,
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        await asyncio.sleep(self._delay)
        self._session = self._issue(email)
        return self._session

    async def sign_up(self, email: str, password: str) -> AuthSession:
        await asyncio.sleep(self._delay)
        self._session = self._issue(email)
        return self._session

    async def sign_out(self) -> None:
        self._session = None

    async def get_current_session(self) -> Optional[AuthSession]:
        return self._session

    async def establish_session_from_tokens(
        self,
        access_token: str,
        refresh_token: str,
    ) -> AuthSession:
        await asyncio.sleep(self._delay)
        if not access_token or not refresh_token:
            raise IdentityProviderError("Missing recovery tokens", operation="set_session")
        self._session = AuthSession(
            access_token=access_token,
            refresh_token=refresh_token,
            user_id=str(uuid.uuid4()),
        )
        return self._session

    async def update_password(self, new_password: str) -> None:
        await asyncio.sleep(self._delay)
        if self._session is None:
            raise IdentityProviderError("Auth session missing!", operation="update_password")

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        await asyncio.sleep(self._delay)
        logger.info(f"Simulated password reset email for {email} -> {redirect_to}")


# Module-level instance getter
_provider_instance: Optional[IIdentityProvider] = None


def get_identity_provider() -> IIdentityProvider:
    """Get the identity provider singleton selected by IDENTITY_BACKEND."""
    global _provider_instance
    if _provider_instance is None:
        settings = get_settings()
        if settings.identity_backend == "supabase":
            _provider_instance = SupabaseIdentityProvider(get_supabase_client())
        elif settings.identity_backend == "simulated":
            _provider_instance = SimulatedIdentityProvider(delay=settings.simulated_auth_delay)
        else:
            raise RuntimeError(f"Unknown identity backend: {settings.identity_backend}")
        logger.debug(f"Using {settings.identity_backend} identity provider")
    return _provider_instance


def reset_identity_provider() -> None:
    """Reset the identity provider singleton (for testing)."""
    global _provider_instance
    _provider_instance = None
