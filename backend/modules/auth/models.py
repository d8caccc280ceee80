"""
Authentication module data models.

These models define the data structures returned by the auth service
to the HTTP layer and any other caller.
"""

from uuid import UUID
from pydantic import BaseModel, Field


class Token(BaseModel):
    """A signed token string and the user it was issued for."""

    value: str = Field(..., description="Signed JWT string")
    user_id: UUID = Field(..., description="Owning user")

    model_config = {"frozen": True}


class TokenPair(BaseModel):
    """Result of every token-issuing operation."""

    access: Token
    refresh: Token

    model_config = {"frozen": True}
