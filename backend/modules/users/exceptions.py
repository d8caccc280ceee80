"""
Users module exceptions.

These exceptions are raised by the users module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional
from uuid import UUID

from shared.exceptions import IncorrectInputError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when no user matches the lookup."""

    def __init__(self, user_id: Optional[UUID] = None):
        details = {"user_id": str(user_id)} if user_id is not None else {}
        super().__init__("User not found", slug="user-not-found", details=details)


class EmailAlreadyExistsError(IncorrectInputError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("Email already in use", slug="field-email-invalid")


class InvalidCurrencyError(IncorrectInputError):
    """Raised when a currency code is not one of the supported currencies."""

    def __init__(self, value: str):
        super().__init__(
            "Invalid currency",
            slug="field-currency-invalid",
            details={"value": value},
        )


class InvalidFirstDayOfWeekError(IncorrectInputError):
    """Raised when a first-day-of-week code is not a known weekday."""

    def __init__(self, value: str):
        super().__init__(
            "Invalid first day of week",
            slug="field-first-day-of-week-invalid",
            details={"value": value},
        )


class InvalidPasswordLengthError(IncorrectInputError):
    """Raised when a password cannot be hashed because of its length."""

    def __init__(self) -> None:
        super().__init__("Invalid password length", slug="field-password-invalid-length")
