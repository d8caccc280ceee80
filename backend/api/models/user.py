"""
Request and response models for the user endpoints.
"""

from uuid import UUID
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from modules.users.models import User


class SettingsPayload(BaseModel):
    """User settings as sent and received over HTTP."""

    currency: str
    first_day_of_week: str
    profile_picture_url: str = ""

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("field-currency-required", "Field is required")
        return value

    @field_validator("first_day_of_week")
    @classmethod
    def check_first_day_of_week(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("invalid-input", "Field is required")
        return value


class UserResponse(BaseModel):
    """Public projection of a user."""

    uuid: UUID
    email: str
    name: str
    settings: SettingsPayload

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            uuid=user.id,
            email=user.email,
            name=user.name,
            settings=SettingsPayload(
                currency=user.settings.currency.value,
                first_day_of_week=user.settings.first_day_of_week.value,
                profile_picture_url=user.settings.profile_picture_url,
            ),
        )
