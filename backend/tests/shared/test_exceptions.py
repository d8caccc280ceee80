"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    AppError,
    AuthorizationError,
    ErrorCategory,
    IncorrectInputError,
    NotFoundError,
)


class TestAppError:
    def test_app_error_message(self):
        """AppError should store message."""
        error = AppError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_app_error_default_slug(self):
        """AppError should fall back to a generic slug."""
        error = AppError("Test error")
        assert error.slug == "unknown-error"

    def test_app_error_default_category(self):
        """AppError should be in the unknown category."""
        assert AppError("Test error").category is ErrorCategory.UNKNOWN

    def test_app_error_custom_slug_and_details(self):
        """AppError should accept slug and details."""
        error = AppError("Test error", slug="custom-slug", details={"key": "value"})
        assert error.slug == "custom-slug"
        assert error.details == {"key": "value"}

    def test_app_error_default_details(self):
        """AppError should default details to empty dict."""
        assert AppError("Test error").details == {}

    def test_app_error_to_dict(self):
        """AppError should convert to dict."""
        error = IncorrectInputError("Bad", slug="field-email-invalid", details={"key": "value"})
        result = error.to_dict()

        assert result == {
            "slug": "field-email-invalid",
            "category": "incorrect-input",
            "message": "Bad",
            "details": {"key": "value"},
        }


class TestSubclasses:
    @pytest.mark.parametrize(
        "error_class,category",
        [
            (AuthorizationError, ErrorCategory.AUTHORIZATION),
            (IncorrectInputError, ErrorCategory.INCORRECT_INPUT),
            (NotFoundError, ErrorCategory.NOT_FOUND),
        ],
    )
    def test_category(self, error_class, category):
        """Each subclass should carry its category."""
        error = error_class("message", slug="slug")
        assert error.category is category
        assert isinstance(error, AppError)

    def test_not_found_defaults(self):
        """NotFoundError should work without arguments."""
        error = NotFoundError()
        assert error.message == "Not found"
        assert error.slug == "not-found"

    def test_catchable_as_app_error(self):
        """All errors should be catchable as AppError."""
        with pytest.raises(AppError):
            raise AuthorizationError("denied", slug="invalid-credentials")
