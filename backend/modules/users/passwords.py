"""
Password hashing helpers.

bcrypt with a fixed work factor. Hashing is CPU-bound and deliberately slow,
so async callers should run these on a worker thread.
"""

import secrets
import string

import bcrypt

from .exceptions import InvalidPasswordLengthError

DEFAULT_ROUNDS = 12
# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72
GENERATED_PASSWORD_LENGTH = 20
GENERATED_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "$#@&^*()"


class PasswordHasher:
    """Salted adaptive password hashing."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password.

        Raises:
            InvalidPasswordLengthError: If the password is over MAX_PASSWORD_BYTES
        """
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidPasswordLengthError()
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if password matches; malformed hashes never match."""
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    """
    Generate a random throwaway password.

    Used for federated accounts, which still need a valid hash but must
    not have a guessable local password.
    """
    return "".join(secrets.choice(GENERATED_PASSWORD_ALPHABET) for _ in range(length))
