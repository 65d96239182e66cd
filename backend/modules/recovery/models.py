"""
Password recovery data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


RECOVERY_TYPE = "recovery"


class TokenSource(str, Enum):
    """Which part of the URL supplied the recovery tokens."""

    QUERY = "query"
    FRAGMENT = "fragment"


class RecoveryIntent(BaseModel):
    """
    A complete, actionable password-recovery request parsed from a URL.

    Only ever built when type, access token and refresh token are all
    present and the type is "recovery".
    """

    type: str = Field(default=RECOVERY_TYPE, description="Always 'recovery'")
    access_token: str = Field(..., min_length=1, description="Access token")
    refresh_token: str = Field(..., min_length=1, description="Refresh token")
    source: TokenSource = Field(..., description="URL part the tokens came from")

    model_config = {"frozen": True}


class RecoveryState(str, Enum):
    """Password recovery controller states."""

    CHECKING = "checking"    # Looking for a usable session
    READY = "ready"          # Password form accepted
    REJECTED = "rejected"    # Link unusable
    COMPLETED = "completed"  # Password changed


class RecoveryView(str, Enum):
    """What the presentation layer should render for each state."""

    SPINNER = "spinner"
    ERROR_PANEL = "error_panel"
    PASSWORD_FORM = "password_form"
    CONFIRMATION = "confirmation"


class RecoveryStatus(BaseModel):
    """Snapshot of the controller for rendering."""

    state: RecoveryState = Field(..., description="Current state")
    view: RecoveryView = Field(..., description="Screen to render")
    error: Optional[str] = Field(None, description="Message to show, if any")
    error_code: Optional[str] = Field(None, description="Error code, if any")
    submitting: bool = Field(default=False, description="Password update in flight")

    model_config = {"frozen": True}


class SubmissionOutcome(BaseModel):
    """Result of a password change submission."""

    accepted: bool = Field(..., description="Whether the password was changed")
    error: Optional[str] = Field(None, description="User-facing error message")
    error_code: Optional[str] = Field(None, description="Error code")
    field: Optional[str] = Field(None, description="Form field the error belongs to")


class ParamPresence(BaseModel):
    """Which recovery parameters one part of a URL carries."""

    type: Optional[str] = Field(None, description="Value of the type parameter")
    access_token: bool = Field(default=False, description="access_token present")
    refresh_token: bool = Field(default=False, description="refresh_token present")


class RecoveryUrlReport(BaseModel):
    """Diagnostic breakdown of a reset link. Tokens are never echoed."""

    url: str = Field(..., description="URL as given")
    query: ParamPresence = Field(..., description="Query-string parameters")
    fragment: ParamPresence = Field(..., description="Fragment parameters")
    source: Optional[TokenSource] = Field(None, description="Source that would be used")
