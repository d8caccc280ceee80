"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from uuid import UUID
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated from a validated access token and made available to route
    handlers via dependency injection. Nothing here is looked up in storage.
    """

    id: UUID = Field(..., description="User ID from the UserId claim")
    access_token: str = Field(..., repr=False, description="Raw access token")

    model_config = {"frozen": True}
