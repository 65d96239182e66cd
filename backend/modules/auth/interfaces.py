"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The recovery controller only needs IIdentityProvider;
presentation code only needs ISessionManager.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import AuthSession, ProfileFields, ProfileUpdate, Session


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface to the hosted identity service (Supabase Auth in production).

    Every method raises IdentityProviderError on failure, except
    sign_in_with_password which raises InvalidCredentialsError when the
    credentials themselves are wrong.
    """

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Authenticate with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            IdentityProviderError: For any other failure
        """
        ...

    async def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a new account and return its session."""
        ...

    async def sign_out(self) -> None:
        """End the provider-side session."""
        ...

    async def get_current_session(self) -> Optional[AuthSession]:
        """
        Return the session the provider already holds, if any.

        Returns:
            AuthSession if one exists, None otherwise
        """
        ...

    async def establish_session_from_tokens(
        self,
        access_token: str,
        refresh_token: str,
    ) -> AuthSession:
        """
        Create a session from an access/refresh token pair.

        Used by password recovery links.
        """
        ...

    async def update_password(self, new_password: str) -> None:
        """Change the password of the user owning the current session."""
        ...

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        """Email a password reset link that lands on redirect_to."""
        ...


@runtime_checkable
class ISessionManager(Protocol):
    """
    Interface for session operations.

    This is the only writer of the persisted identity.
    """

    @property
    def session(self) -> Session:
        """Current session snapshot."""
        ...

    async def login(self, email: str, password: str) -> Session:
        """
        Log in and persist the resulting identity.

        Raises:
            InvalidCredentialsError: If the provider rejects the credentials
            OperationInProgressError: If a login/signup is already running
        """
        ...

    async def signup(self, profile: ProfileFields, password: str) -> Session:
        """Create an account and persist the resulting identity."""
        ...

    def logout(self) -> None:
        """Clear the identity. Safe to call when already logged out."""
        ...

    def update_profile(self, updates: ProfileUpdate) -> Session:
        """Apply profile edits to the current identity."""
        ...

    async def request_password_reset(self, email: str) -> None:
        """Ask the provider to send a reset link to email."""
        ...
