import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from modules.auth.exceptions import IdentityProviderError, InvalidCredentialsError
from modules.auth.provider import (
    SimulatedIdentityProvider,
    SupabaseIdentityProvider,
    get_identity_provider,
)


def make_session(user_id="user-123", email="jane@college.edu"):
    """Build an object shaped like a supabase-py Session."""
    return SimpleNamespace(
        access_token="access-123",
        refresh_token="refresh-456",
        user=SimpleNamespace(id=user_id, email=email),
    )


class AuthApiError(Exception):
    """Stand-in for supabase-py's AuthApiError."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class TestSupabaseIdentityProvider:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, client):
        return SupabaseIdentityProvider(client)

    @pytest.mark.asyncio
    async def test_sign_in(self, provider, client):
        """Should map the Supabase session to an AuthSession."""
        client.auth.sign_in_with_password.return_value = SimpleNamespace(
            session=make_session(), user=None
        )
        auth = await provider.sign_in_with_password("jane@college.edu", "secret")

        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "jane@college.edu", "password": "secret"}
        )
        assert auth.user_id == "user-123"
        assert auth.access_token == "access-123"
        assert auth.email == "jane@college.edu"

    @pytest.mark.asyncio
    async def test_sign_in_invalid_credentials(self, provider, client):
        """invalid_credentials errors should become InvalidCredentialsError."""
        client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", code="invalid_credentials"
        )
        with pytest.raises(InvalidCredentialsError):
            await provider.sign_in_with_password("jane@college.edu", "wrong")

    @pytest.mark.asyncio
    async def test_sign_in_other_error(self, provider, client):
        """Other errors should become IdentityProviderError."""
        client.auth.sign_in_with_password.side_effect = AuthApiError("Server error")
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_in_with_password("jane@college.edu", "secret")
        assert exc_info.value.message == "Server error"
        assert exc_info.value.details["operation"] == "sign_in"

    @pytest.mark.asyncio
    async def test_sign_up_pending_confirmation(self, provider, client):
        """Signup without a session should still return the user ID."""
        client.auth.sign_up.return_value = SimpleNamespace(
            session=None,
            user=SimpleNamespace(id="new-user", email="jane@college.edu"),
        )
        auth = await provider.sign_up("jane@college.edu", "secret")
        assert auth.user_id == "new-user"
        assert auth.access_token == ""

    @pytest.mark.asyncio
    async def test_get_current_session_none(self, provider, client):
        """No Supabase session should map to None."""
        client.auth.get_session.return_value = None
        assert await provider.get_current_session() is None

    @pytest.mark.asyncio
    async def test_get_current_session(self, provider, client):
        """An existing Supabase session should be returned."""
        client.auth.get_session.return_value = make_session()
        auth = await provider.get_current_session()
        assert auth.user_id == "user-123"

    @pytest.mark.asyncio
    async def test_establish_session(self, provider, client):
        """Should pass both tokens to set_session."""
        client.auth.set_session.return_value = SimpleNamespace(session=make_session())
        await provider.establish_session_from_tokens("A", "B")
        client.auth.set_session.assert_called_once_with("A", "B")

    @pytest.mark.asyncio
    async def test_establish_session_error(self, provider, client):
        """set_session failures should become IdentityProviderError."""
        client.auth.set_session.side_effect = AuthApiError("Invalid Refresh Token")
        with pytest.raises(IdentityProviderError):
            await provider.establish_session_from_tokens("A", "B")

    @pytest.mark.asyncio
    async def test_update_password_preserves_message(self, provider, client):
        """The provider's message should be kept verbatim."""
        client.auth.update_user.side_effect = AuthApiError(
            "New password should be different from the old password."
        )
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.update_password("secret1")
        assert exc_info.value.message == "New password should be different from the old password."

    @pytest.mark.asyncio
    async def test_send_password_reset(self, provider, client):
        """Should request a reset email with the redirect URL."""
        await provider.send_password_reset("jane@college.edu", "http://app/reset")
        client.auth.reset_password_for_email.assert_called_once_with(
            "jane@college.edu", {"redirect_to": "http://app/reset"}
        )


class TestSimulatedIdentityProvider:
    @pytest.mark.asyncio
    async def test_sign_in_creates_session(self):
        """Sign-in should always succeed and hold a session."""
        provider = SimulatedIdentityProvider(delay=0)
        auth = await provider.sign_in_with_password("jane@college.edu", "anything")
        assert auth.email == "jane@college.edu"
        assert await provider.get_current_session() == auth

    @pytest.mark.asyncio
    async def test_sign_out_drops_session(self):
        """Sign-out should clear the held session."""
        provider = SimulatedIdentityProvider(delay=0)
        await provider.sign_in_with_password("jane@college.edu", "anything")
        await provider.sign_out()
        assert await provider.get_current_session() is None

    @pytest.mark.asyncio
    async def test_establish_session_needs_both_tokens(self):
        """Blank tokens should be refused."""
        provider = SimulatedIdentityProvider(delay=0)
        with pytest.raises(IdentityProviderError):
            await provider.establish_session_from_tokens("A", "")

    @pytest.mark.asyncio
    async def test_update_password_needs_session(self):
        """Changing the password without a session should fail."""
        provider = SimulatedIdentityProvider(delay=0)
        with pytest.raises(IdentityProviderError):
            await provider.update_password("secret1")

        await provider.establish_session_from_tokens("A", "B")
        await provider.update_password("secret1")


class TestGetIdentityProvider:
    def test_simulated_by_default(self):
        """The simulated provider should be the default."""
        assert isinstance(get_identity_provider(), SimulatedIdentityProvider)

    def test_singleton(self):
        """get_identity_provider should return the same instance."""
        assert get_identity_provider() is get_identity_provider()

    @patch("modules.auth.provider.get_supabase_client")
    def test_supabase_backend(self, mock_client, monkeypatch):
        """IDENTITY_BACKEND=supabase should select the Supabase provider."""
        monkeypatch.setenv("IDENTITY_BACKEND", "supabase")
        mock_client.return_value = MagicMock()
        assert isinstance(get_identity_provider(), SupabaseIdentityProvider)

    def test_unknown_backend(self, monkeypatch):
        """An unknown backend should fail loudly."""
        monkeypatch.setenv("IDENTITY_BACKEND", "ldap")
        with pytest.raises(RuntimeError, match="Unknown identity backend"):
            get_identity_provider()
