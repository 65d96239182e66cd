"""
ID verification exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, StudexError, ValidationError


class VerificationError(StudexError):
    """Base exception for ID verification errors."""

    pass


class UnsupportedFileTypeError(ValidationError):
    """The selected file is not an image."""

    def __init__(self, media_type: str):
        super().__init__(
            "Please upload an image (JPG, PNG, etc.).",
            code="UNSUPPORTED_FILE_TYPE",
            details={"media_type": media_type},
        )


class VerificationRejectedError(VerificationError):
    """The classifier could not verify the ID."""

    def __init__(self, reason: str = "Unable to verify ID"):
        super().__init__(reason, code="VERIFICATION_REJECTED")


class ClassificationFailedError(VerificationError):
    """The classifier itself failed before reaching a decision."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            "Unable to verify ID",
            code="CLASSIFICATION_FAILED",
            details={"reason": reason} if reason else {},
        )


class NoArtifactError(ValidationError):
    """verify() was called with no image selected."""

    def __init__(self):
        super().__init__("Select an ID image first", code="NO_ARTIFACT")


class VerificationStateError(ConflictError):
    """verify() was called outside the idle state."""

    def __init__(self, status: str):
        super().__init__(
            f"Cannot start verification while {status}",
            code="VERIFICATION_STATE",
            details={"status": status},
        )
