"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    A registered student's profile.

    This is what the Session Store persists and what the rest of the
    application renders. The verified flag is decided once, when the
    identity is created, and never recomputed.
    """

    id: str = Field(..., description="User ID")
    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    institution: str = Field(default="", description="College or university")
    field_of_study: str = Field(default="", description="Branch / major")
    year: int = Field(default=1, ge=1, description="Year of study")
    bio: str = Field(default="", description="Free-text bio")
    is_verified: bool = Field(default=False, description="Academic email verified at creation")
    is_anonymous: bool = Field(default=False, description="Post anonymously by default")
    created_at: datetime = Field(..., description="Account creation time")

    model_config = {"frozen": True}


class Session(BaseModel):
    """
    Snapshot of "is someone authenticated, and as whom".

    A missing identity means nobody is logged in. Snapshots are
    immutable; the store swaps whole snapshots on every transition.
    """

    identity: Optional[Identity] = Field(None, description="Current identity, if any")
    loading: bool = Field(default=False, description="Login/signup in flight")

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


class ProfileFields(BaseModel):
    """Profile data collected by the signup form. Every field is optional."""

    name: Optional[str] = None
    email: Optional[str] = None
    institution: Optional[str] = None
    field_of_study: Optional[str] = None
    year: Optional[int] = Field(None, ge=1)
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Editable subset of an Identity. None means "leave unchanged"."""

    name: Optional[str] = None
    institution: Optional[str] = None
    field_of_study: Optional[str] = None
    year: Optional[int] = Field(None, ge=1)
    bio: Optional[str] = None
    is_anonymous: Optional[bool] = None


class AuthSession(BaseModel):
    """
    Session issued by the identity provider.

    Mirrors the parts of a Supabase Auth session this subsystem uses.
    """

    access_token: str = Field(..., description="Access token (JWT)")
    refresh_token: str = Field(..., description="Refresh token")
    user_id: str = Field(..., description="Provider user ID")
    email: Optional[str] = Field(None, description="Email on the provider account")

    model_config = {"frozen": True}
