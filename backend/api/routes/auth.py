"""
Sign-in endpoints.

Password sign-up and sign-in, refresh token rotation and Google sign-in.
Each returns a fresh access/refresh token pair.
"""

from fastapi import APIRouter, Depends, Request

from modules.auth.interfaces import IAuthService
from modules.auth.models import TokenPair

from ..dependencies import get_auth_service, with_deadline
from ..models.auth import (
    GoogleSignInRequest,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenPairResponse,
)
from ..models.errors import ErrorResponse

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
}


def _to_response(tokens: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(access=tokens.access.value, refresh=tokens.refresh.value)


@router.post(
    "/signIn",
    response_model=TokenPairResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": SignInRequest.model_json_schema()}},
        },
    },
)
async def sign_in(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> TokenPairResponse:
    """
    Sign in with email and password.

    The body is read by hand so that no input ever fails validation.
    """
    body = SignInRequest.from_body(await request.body())
    tokens = await with_deadline(auth.sign_in(body.email, body.password))
    return _to_response(tokens)


@router.post("/signUp", response_model=TokenPairResponse, responses=_ERROR_RESPONSES)
async def sign_up(
    body: SignUpRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> TokenPairResponse:
    """Register a new user and sign them in."""
    tokens = await with_deadline(auth.sign_up(body.email, body.password, body.name))
    return _to_response(tokens)


@router.post("/refresh", response_model=TokenPairResponse, responses=_ERROR_RESPONSES)
async def refresh(
    body: RefreshRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> TokenPairResponse:
    """
    Rotate a refresh token.

    The presented token is consumed; reusing it fails with invalid-token.
    """
    tokens = await with_deadline(auth.refresh(body.refresh))
    return _to_response(tokens)


@router.post("/google-signIn", response_model=TokenPairResponse, responses=_ERROR_RESPONSES)
async def google_sign_in(
    body: GoogleSignInRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> TokenPairResponse:
    """Sign in with a Google ID token, creating the account on first use."""
    tokens = await with_deadline(auth.federated_sign_in(body.credential))
    return _to_response(tokens)
