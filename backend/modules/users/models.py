"""
Users module data models.

User records, their settings and the closed value sets settings draw from.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Union
from uuid import UUID, uuid4
from pydantic import BaseModel, Field

from .exceptions import InvalidCurrencyError, InvalidFirstDayOfWeekError


class Currency(str, Enum):
    """Currencies a user can keep their books in."""

    RUB = "RUB"
    GEL = "GEL"
    AMD = "AMD"
    USD = "USD"
    EUR = "EUR"
    RSD = "RSD"


class Weekday(str, Enum):
    """Day a user's calendar week starts on."""

    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"


class ParsePolicy(str, Enum):
    """
    How an unrecognized enum string is handled.

    STRICT rejects it. FALLBACK substitutes the field's default. Values read
    back from storage use FALLBACK for the first day of week so a bad row
    never blocks sign-in; values written through the settings endpoint are
    STRICT unless configured otherwise.
    """

    STRICT = "strict"
    FALLBACK = "fallback"


DEFAULT_CURRENCY = Currency.RUB
DEFAULT_FIRST_DAY_OF_WEEK = Weekday.MON


def parse_currency(value: str) -> Currency:
    """Parse a currency code. Unknown codes are always rejected."""
    try:
        return Currency(value)
    except ValueError:
        raise InvalidCurrencyError(value) from None


def parse_weekday(
    value: str,
    policy: Union[ParsePolicy, str] = ParsePolicy.STRICT,
) -> Weekday:
    """Parse a first-day-of-week code according to policy."""
    try:
        return Weekday(value)
    except ValueError:
        if ParsePolicy(policy) is ParsePolicy.FALLBACK:
            return DEFAULT_FIRST_DAY_OF_WEEK
        raise InvalidFirstDayOfWeekError(value) from None


class UserSettings(BaseModel):
    """Per-user preferences. Always replaced as a whole, never merged."""

    currency: Currency = DEFAULT_CURRENCY
    first_day_of_week: Weekday = DEFAULT_FIRST_DAY_OF_WEEK
    profile_picture_url: str = ""

    model_config = {"frozen": True}

    def with_picture(self, profile_picture_url: str) -> "UserSettings":
        """Return a full copy with only the profile picture changed."""
        return self.model_copy(update={"profile_picture_url": profile_picture_url})

    def to_storage(self) -> dict[str, str]:
        """Flat string map as stored in the users.settings column."""
        return {
            "currency": self.currency.value,
            "first_day_of_week": self.first_day_of_week.value,
            "profile_picture_url": self.profile_picture_url,
        }

    @classmethod
    def from_storage(cls, data: dict[str, str]) -> "UserSettings":
        """
        Rebuild settings from the stored map.

        Currency must be valid; an unknown first day of week falls back
        to the default.
        """
        return cls(
            currency=parse_currency(data.get("currency", "")),
            first_day_of_week=parse_weekday(
                data.get("first_day_of_week", ""), ParsePolicy.FALLBACK
            ),
            profile_picture_url=data.get("profile_picture_url", ""),
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """A registered user."""

    id: UUID = Field(default_factory=uuid4, description="User identity")
    email: str = Field(..., description="Unique email, stored as given")
    name: str = Field(default="", description="Display name")
    password_hash: str = Field(..., repr=False, description="bcrypt hash")
    settings: UserSettings = Field(default_factory=UserSettings)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
