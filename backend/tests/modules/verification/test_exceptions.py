"""Tests for verification module exceptions."""

from shared.exceptions import ConflictError, ValidationError
from modules.verification.exceptions import (
    ClassificationFailedError,
    NoArtifactError,
    UnsupportedFileTypeError,
    VerificationError,
    VerificationRejectedError,
    VerificationStateError,
)


class TestVerificationExceptions:
    def test_unsupported_file_type(self):
        """Should carry the rejected media type."""
        error = UnsupportedFileTypeError("application/pdf")
        assert isinstance(error, ValidationError)
        assert error.code == "UNSUPPORTED_FILE_TYPE"
        assert error.details["media_type"] == "application/pdf"

    def test_rejected_default_message(self):
        """Rejection should default to the fixed message."""
        error = VerificationRejectedError()
        assert isinstance(error, VerificationError)
        assert error.message == "Unable to verify ID"

    def test_classification_failed(self):
        """Classifier failures should read like a rejection but keep the reason."""
        error = ClassificationFailedError("backend down")
        assert isinstance(error, VerificationError)
        assert error.message == "Unable to verify ID"
        assert error.code == "CLASSIFICATION_FAILED"
        assert error.details == {"reason": "backend down"}
        assert ClassificationFailedError().details == {}

    def test_state_errors(self):
        """Misuse errors should have the expected categories."""
        assert isinstance(NoArtifactError(), ValidationError)
        error = VerificationStateError("verifying")
        assert isinstance(error, ConflictError)
        assert error.details["status"] == "verifying"
