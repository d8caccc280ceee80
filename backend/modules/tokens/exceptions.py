"""
Token module exceptions.
"""

from shared.exceptions import AuthorizationError


class InvalidTokenError(AuthorizationError):
    """Raised when a JWT is malformed, tampered with, or of the wrong kind."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, slug="invalid-token")


class ExpiredTokenError(InvalidTokenError):
    """Raised when a JWT has expired."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenSigningError(AuthorizationError):
    """Raised when a token cannot be signed."""

    def __init__(self, message: str = "Could not sign token"):
        super().__init__(message, slug="could-not-authorize-user")
