"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    StudexError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
)


class TestStudexError:
    def test_studex_error_message(self):
        """StudexError should store message."""
        error = StudexError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_studex_error_default_code(self):
        """StudexError should default code to class name."""
        error = StudexError("Test error")
        assert error.code == "StudexError"

    def test_studex_error_custom_code(self):
        """StudexError should accept custom code."""
        error = StudexError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_studex_error_default_details(self):
        """StudexError should default details to empty dict."""
        error = StudexError("Test error")
        assert error.details == {}

    def test_studex_error_to_dict(self):
        """StudexError should convert to dict."""
        error = StudexError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestSubclasses:
    @pytest.mark.parametrize(
        "error_class",
        [ValidationError, AuthenticationError, ConflictError],
    )
    def test_inherits_studex_error(self, error_class):
        """Base categories should inherit from StudexError."""
        error = error_class("Something failed")
        assert isinstance(error, StudexError)
        assert error.code == error_class.__name__

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError(
            "Validation failed",
            details={"fields": {"email": "Email is required"}}
        )
        assert error.details["fields"]["email"] == "Email is required"


class TestExternalServiceError:
    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, StudexError)
        assert error.service == "supabase"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should merge service into details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 500}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"
        assert result["details"]["status_code"] == 500
