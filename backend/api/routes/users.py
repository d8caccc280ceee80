"""
User-related endpoints.

Provides endpoints for the current user's profile and settings.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service, with_deadline
from ..middleware.auth import get_current_user
from ..models.errors import ErrorResponse
from ..models.user import SettingsPayload, UserResponse

router = APIRouter()


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    profile = await with_deadline(auth.get_user(user.id))
    return UserResponse.from_user(profile)


@router.put(
    "/settings",
    response_model=UserResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_settings(
    body: SettingsPayload,
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Replace the current user's settings.

    All fields are written; omitted picture URL clears it.
    """
    updated = await with_deadline(
        auth.update_settings(
            user.id,
            body.currency,
            body.first_day_of_week,
            body.profile_picture_url,
        )
    )
    return UserResponse.from_user(updated)
