"""
Identity module data models.
"""

from pydantic import BaseModel, Field


class FederatedIdentity(BaseModel):
    """
    Claims taken from a verified third-party identity assertion.

    Only constructed after the assertion's signature, audience and issuer
    have been checked.
    """

    email: str = Field(..., min_length=1, description="Email asserted by the provider")
    name: str = Field(default="", description="Display name")
    picture: str = Field(default="", description="Profile picture URL")

    model_config = {"frozen": True}
