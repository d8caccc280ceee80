"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Clients key off the slug; messages are never sent.
    """

    slug: str
