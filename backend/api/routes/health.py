"""
Health check endpoint.

Used by load balancers and container orchestration to probe the service.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running. Storage is not probed.
    """
    return HealthResponse(status="ok")
