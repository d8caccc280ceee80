"""
Request and response models for the sign-in endpoints.

Validators raise errors whose type is the slug reported to the client,
so the API error handler can return it as-is.
"""

import json
from typing import Any

from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from modules.users.passwords import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 5


def _required(value: object, slug: str) -> object:
    if value is None or value == "":
        raise PydanticCustomError(slug, "Field is required")
    return value


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


class SignInRequest(BaseModel):
    """
    Sign-in body.

    Never validated: a body that does not hold two strings is read as empty
    credentials and simply fails as invalid credentials.
    """

    email: str = ""
    password: str = ""

    @classmethod
    def from_body(cls, raw: bytes) -> "SignInRequest":
        try:
            payload: Any = json.loads(raw) if raw else {}
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            email=_as_str(payload.get("email")),
            password=_as_str(payload.get("password")),
        )


class SignUpRequest(BaseModel):
    """Sign-up body."""

    email: str
    password: str
    name: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        _required(value, "field-email-required")
        try:
            validate_email(value)
        except ValueError:
            raise PydanticCustomError("field-email-invalid", "Invalid email")
        # Stored exactly as given.
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        _required(value, "field-password-required")
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "field-password-invalid-length",
                "Password must be at least {min_length} characters",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "field-password-invalid-length",
                "Password must be at most {max_bytes} bytes",
                {"max_bytes": MAX_PASSWORD_BYTES},
            )
        return value

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        _required(value, "field-name-required")
        return value


class RefreshRequest(BaseModel):
    """Refresh body."""

    refresh: str

    @field_validator("refresh")
    @classmethod
    def check_refresh(cls, value: str) -> str:
        _required(value, "invalid-token")
        return value


class GoogleSignInRequest(BaseModel):
    """Google sign-in body: the ID token returned by Google Sign-In."""

    credential: str = ""


class TokenPairResponse(BaseModel):
    """Access and refresh token strings."""

    access: str
    refresh: str
