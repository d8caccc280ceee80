"""
Sessions module data models.
"""

from datetime import datetime, timezone
from uuid import UUID
from pydantic import BaseModel, Field

from modules.tokens.models import RefreshToken


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionRecord(BaseModel):
    """
    A stored refresh token: one live session of a user.

    The raw signed string is kept so a token is only accepted when the
    exact string that was issued is presented.
    """

    token_id: UUID = Field(..., description="Refresh token identity (UUID claim)")
    user_id: UUID = Field(..., description="Owning user")
    token: str = Field(..., repr=False, description="Raw signed refresh token")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}

    @classmethod
    def from_refresh(cls, refresh: RefreshToken) -> "SessionRecord":
        if refresh.claims.token_id is None:
            raise ValueError("Refresh token has no identity; sign it before storing")
        return cls(
            token_id=refresh.claims.token_id,
            user_id=refresh.claims.user_id,
            token=refresh.token,
        )
