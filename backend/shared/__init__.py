"""
Shared infrastructure for the Studex identity backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- storage: Durable key-value storage for client-side state

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    StudexError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    StorageError,
)
from .storage import IKeyValueStore, JsonFileStore, InMemoryStore

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "StudexError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "ExternalServiceError",
    "StorageError",
    "IKeyValueStore",
    "JsonFileStore",
    "InMemoryStore",
]
