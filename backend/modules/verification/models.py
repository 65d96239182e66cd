"""
ID verification data models.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class VerificationStatus(str, Enum):
    """ID verification states."""

    IDLE = "idle"            # No artifact, or artifact not yet submitted
    VERIFYING = "verifying"  # Classification in flight
    VERIFIED = "verified"
    FAILED = "failed"


class SelectedFile(BaseModel):
    """A file as handed over by the file picker."""

    name: str = Field(default="", description="Original file name")
    media_type: str = Field(..., description="Declared MIME type")
    payload: bytes = Field(..., description="File contents")

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def is_image(self) -> bool:
        return self.media_type.lower().startswith("image/")


class VerificationArtifact(BaseModel):
    """An accepted ID image waiting for, or past, classification."""

    name: str = Field(default="", description="Original file name")
    media_type: str = Field(..., description="Declared MIME type (image/*)")
    size: int = Field(..., ge=0, description="Size in bytes")
    payload: bytes = Field(..., repr=False, description="File contents")
    preview_ref: str = Field(..., description="Handle of the rendered preview")

    model_config = {"frozen": True}


class ExtractedDetails(BaseModel):
    """Details read off a verified ID card."""

    name: str = Field(..., description="Student name on the card")
    institution: str = Field(..., description="Issuing institution")
    document_number: str = Field(..., description="ID card number")


class VerifiedClassification(BaseModel):
    outcome: Literal["verified"] = "verified"
    details: ExtractedDetails


class RejectedClassification(BaseModel):
    outcome: Literal["rejected"] = "rejected"
    reason: str


Classification = Annotated[
    Union[VerifiedClassification, RejectedClassification],
    Field(discriminator="outcome"),
]


class VerificationSnapshot(BaseModel):
    """State of the verification widget for rendering."""

    status: VerificationStatus = Field(..., description="Current state")
    has_artifact: bool = Field(..., description="Whether an image is selected")
    preview_ref: Optional[str] = Field(None, description="Preview of the selected image")
    details: Optional[ExtractedDetails] = Field(None, description="Set when verified")
    error: Optional[str] = Field(None, description="Message to show, if any")
    error_code: Optional[str] = Field(None, description="Error code, if any")

    model_config = {"frozen": True}
