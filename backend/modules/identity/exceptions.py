"""
Identity module exceptions.
"""

from shared.exceptions import IncorrectInputError


class IdentityVerificationError(IncorrectInputError):
    """
    Raised when a federated identity assertion cannot be verified.

    The message stays opaque; the underlying reason is only logged.
    """

    def __init__(self) -> None:
        super().__init__("Could not verify identity", slug="invalid-credentials")
