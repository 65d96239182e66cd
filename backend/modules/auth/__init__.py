"""
Authentication module.

Handles login, signup and logout, the persisted session, and the
connection to the hosted identity provider.

Public API:
- ISessionManager: Interface for session operations
- IIdentityProvider: Interface to the identity provider
- Identity, Session: Current user and session snapshot
- Auth exceptions: InvalidCredentialsError, NotAuthenticatedError, etc.
"""

from .interfaces import IIdentityProvider, ISessionManager
from .models import AuthSession, Identity, ProfileFields, ProfileUpdate, Session
from .rules import format_display_name, is_academic_email
from .exceptions import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    OperationInProgressError,
    IdentityProviderError,
)

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "ISessionManager",
    # Models
    "AuthSession",
    "Identity",
    "ProfileFields",
    "ProfileUpdate",
    "Session",
    # Rules
    "format_display_name",
    "is_academic_email",
    # Exceptions
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    "OperationInProgressError",
    "IdentityProviderError",
]
