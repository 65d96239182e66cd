"""
Centralized configuration for the Studex identity backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced by prefix (e.g., SUPABASE_*, ID_VERIFICATION_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Studex Identity"
    app_version: str = "0.1.0"
    debug: bool = False

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Identity provider: "simulated" or "supabase"
    identity_backend: str = "simulated"
    simulated_auth_delay: float = 1.0  # seconds

    # Session persistence
    session_storage_path: str = ".studex/session.json"
    session_storage_key: str = "campuslink_user"

    # Accounts
    academic_email_suffixes: list[str] = [".edu", ".ac.in"]
    academic_email_patterns: list[str] = [
        r"@.*college.*\.in$",
        r"@.*university.*\.in$",
        r"@.*institute.*\.in$",
        r"@axiscolleges\.in$",
    ]
    password_min_length: int = 6
    password_reset_redirect_url: str = "http://localhost:5173/reset-password"

    # ID card verification
    id_verification_min_bytes: int = 30_000
    id_verification_delay: float = 0.8  # seconds


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
