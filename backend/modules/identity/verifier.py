"""
Google ID token verification.

Checks a Google Sign-In credential against Google's published signing keys,
the configured OAuth client id and Google's issuers.
"""

import asyncio
import logging
from typing import Any, Optional

import jwt
from jwt import PyJWKClient
from pydantic import ValidationError

from .exceptions import IdentityVerificationError
from .models import FederatedIdentity

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ["accounts.google.com", "https://accounts.google.com"]
GOOGLE_ALGORITHMS = ["RS256"]


class GoogleIdentityVerifier:
    """
    IIdentityVerifier backed by Google's JWKS endpoint.

    Key fetching is blocking HTTP, so verification runs on a worker thread.
    Keys are cached by the JWKS client between calls.
    """

    def __init__(
        self,
        client_id: str,
        jwks_client: Optional[PyJWKClient] = None,
    ):
        self._client_id = client_id
        self._jwks_client = jwks_client or PyJWKClient(
            GOOGLE_CERTS_URL,
            cache_jwk_set=True,
            lifespan=3600,
        )

    async def verify(self, assertion: str) -> FederatedIdentity:
        if not assertion:
            raise IdentityVerificationError()
        claims = await asyncio.to_thread(self._decode, assertion)
        try:
            return FederatedIdentity(
                email=claims.get("email") or "",
                name=claims.get("name") or "",
                picture=claims.get("picture") or "",
            )
        except ValidationError:
            logger.info("Google credential carries no email")
            raise IdentityVerificationError()

    def _decode(self, assertion: str) -> dict[str, Any]:
        if not self._client_id:
            logger.error("Google client id is not configured; rejecting credential")
            raise IdentityVerificationError()
        try:
            signing_key = self._jwks_client.get_signing_key_from_jwt(assertion)
            claims = jwt.decode(
                assertion,
                signing_key.key,
                algorithms=GOOGLE_ALGORITHMS,
                audience=self._client_id,
                options={"require": ["exp", "aud", "iss"]},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Google credential rejected: {e}")
            raise IdentityVerificationError()

        if claims.get("iss") not in GOOGLE_ISSUERS:
            logger.info(f"Google credential rejected: unexpected issuer {claims.get('iss')!r}")
            raise IdentityVerificationError()
        return claims
