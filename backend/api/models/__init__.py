"""API models package."""

from .auth import (
    SignInRequest,
    SignUpRequest,
    RefreshRequest,
    GoogleSignInRequest,
    TokenPairResponse,
)
from .errors import ErrorResponse
from .user import SettingsPayload, UserResponse

__all__ = [
    "SignInRequest",
    "SignUpRequest",
    "RefreshRequest",
    "GoogleSignInRequest",
    "TokenPairResponse",
    "ErrorResponse",
    "SettingsPayload",
    "UserResponse",
]
