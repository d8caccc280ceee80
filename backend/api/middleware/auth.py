"""
Bearer token authentication.

Validates access tokens issued by the auth service and exposes the caller
to route handlers.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.interfaces import IAuthService
from modules.tokens.exceptions import InvalidTokenError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a signed-in user. The access token
    is checked by signature and expiry only; storage is never consulted.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Raises:
        InvalidTokenError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Missing authorization header")

    token = await auth.validate_access(credentials.credentials)
    return AuthenticatedUser(id=token.user_id, access_token=token.value)
