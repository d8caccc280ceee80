"""
Token module data models.

Claim shapes for the two token kinds and the signed results.
Wire claim names are UserId, UUID and exp.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class AccessClaims(BaseModel):
    """Claims of a short-lived access token."""

    user_id: UUID = Field(..., alias="UserId", description="Owning user")
    expires_at: Optional[datetime] = Field(None, alias="exp", description="Expiration")

    # extra="forbid" keeps refresh tokens (which carry UUID) out of the access path
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"UserId": str(self.user_id)}
        if self.expires_at is not None:
            payload["exp"] = self.expires_at
        return payload


class RefreshClaims(BaseModel):
    """Claims of a long-lived, revocable refresh token."""

    token_id: Optional[UUID] = Field(None, alias="UUID", description="Per-issuance identity")
    user_id: UUID = Field(..., alias="UserId", description="Owning user")
    expires_at: Optional[datetime] = Field(None, alias="exp", description="Expiration")

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"UserId": str(self.user_id)}
        if self.token_id is not None:
            payload["UUID"] = str(self.token_id)
        if self.expires_at is not None:
            payload["exp"] = self.expires_at
        return payload


class AccessToken(BaseModel):
    """Signed access token together with the claims it carries."""

    claims: AccessClaims
    token: str = Field(..., description="Signed JWT string")

    model_config = {"frozen": True}


class RefreshToken(BaseModel):
    """Signed refresh token together with the claims it carries."""

    claims: RefreshClaims
    token: str = Field(..., description="Signed JWT string")

    model_config = {"frozen": True}


def new_access_claims(user_id: UUID) -> AccessClaims:
    """Build unsigned access claims for a user."""
    return AccessClaims(user_id=user_id)


def new_refresh_claims(user_id: UUID) -> RefreshClaims:
    """Build unsigned refresh claims for a user. The codec assigns the identity."""
    return RefreshClaims(user_id=user_id)
