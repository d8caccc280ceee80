"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from modules.tokens.exceptions import InvalidTokenError
from shared.exceptions import AuthorizationError


class InvalidCredentialsError(AuthorizationError):
    """
    Raised when sign-in fails.

    Used both for an unknown email and for a wrong password so the two
    cannot be told apart.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials", slug="invalid-credentials")


class RevokedTokenError(InvalidTokenError):
    """Raised when a refresh token is well-formed but no longer in the ledger."""

    def __init__(self) -> None:
        super().__init__("Refresh token not found")


class CouldNotAuthorizeError(AuthorizationError):
    """Raised when a token pair could not be issued."""

    def __init__(self, message: str = "Could not authorize user"):
        super().__init__(message, slug="could-not-authorize-user")
