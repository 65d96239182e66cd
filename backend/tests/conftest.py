"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from shared.config import Settings, get_settings
from shared.database import reset_client_cache
from shared.storage import InMemoryStore
from modules.auth.models import AuthSession
from modules.auth.provider import reset_identity_provider
from modules.auth.service import reset_session_manager


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons before and after each test."""
    reset_session_manager()
    reset_identity_provider()
    reset_client_cache()
    get_settings.cache_clear()
    yield
    reset_session_manager()
    reset_identity_provider()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with simulated delays switched off."""
    return Settings(
        simulated_auth_delay=0,
        id_verification_delay=0,
        session_storage_key="campuslink_user",
    )


@pytest.fixture
def storage() -> InMemoryStore:
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def auth_session() -> AuthSession:
    """A provider session for a college account."""
    return AuthSession(
        access_token="access-123",
        refresh_token="refresh-456",
        user_id="user-123",
        email="jane@college.edu",
    )


@pytest.fixture
def provider(auth_session: AuthSession) -> MagicMock:
    """Identity provider mock where every call succeeds."""
    mock = MagicMock()
    mock.sign_in_with_password = AsyncMock(return_value=auth_session)
    mock.sign_up = AsyncMock(return_value=auth_session)
    mock.sign_out = AsyncMock(return_value=None)
    mock.get_current_session = AsyncMock(return_value=None)
    mock.establish_session_from_tokens = AsyncMock(return_value=auth_session)
    mock.update_password = AsyncMock(return_value=None)
    mock.send_password_reset = AsyncMock(return_value=None)
    return mock
