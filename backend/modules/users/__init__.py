"""
Users module.

Owns user records and their settings: the user half of the credential store.

Public API:
- IUserRepository: Interface for user persistence
- PostgresUserRepository / InMemoryUserRepository: Implementations
- User, UserSettings, Currency, Weekday, ParsePolicy: Models
- PasswordHasher: bcrypt hashing
- User exceptions: UserNotFoundError, EmailAlreadyExistsError, etc.
"""

from .interfaces import IUserRepository
from .memory import InMemoryUserRepository
from .models import (
    Currency,
    Weekday,
    ParsePolicy,
    User,
    UserSettings,
    parse_currency,
    parse_weekday,
)
from .passwords import PasswordHasher, generate_password
from .repository import PostgresUserRepository
from .exceptions import (
    UserNotFoundError,
    EmailAlreadyExistsError,
    InvalidCurrencyError,
    InvalidFirstDayOfWeekError,
    InvalidPasswordLengthError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Implementations
    "PostgresUserRepository",
    "InMemoryUserRepository",
    # Models
    "Currency",
    "Weekday",
    "ParsePolicy",
    "User",
    "UserSettings",
    "parse_currency",
    "parse_weekday",
    # Passwords
    "PasswordHasher",
    "generate_password",
    # Exceptions
    "UserNotFoundError",
    "EmailAlreadyExistsError",
    "InvalidCurrencyError",
    "InvalidFirstDayOfWeekError",
    "InvalidPasswordLengthError",
]
