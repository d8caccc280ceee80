"""
Token codec implementation.

Signs and verifies access and refresh tokens with a single shared secret.
Stateless: nothing here touches storage, and all configuration is passed
in at construction.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from uuid import uuid4

import jwt
from pydantic import ValidationError

from .exceptions import ExpiredTokenError, InvalidTokenError, TokenSigningError
from .models import AccessClaims, AccessToken, RefreshClaims, RefreshToken

SIGNING_ALGORITHM = "HS256"

# Only the HMAC family is accepted when verifying, so a token whose header
# names "none" or an asymmetric algorithm is rejected outright.
ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]

ACCESS_REQUIRED_CLAIMS = ["exp", "UserId"]
REFRESH_REQUIRED_CLAIMS = ["exp", "UserId", "UUID"]


@dataclass(frozen=True)
class TokenConfig:
    """Signing secret and lifetimes (seconds) for both token kinds."""

    secret: str
    access_ttl: int
    refresh_ttl: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Creates and validates signed tokens.

    Access tokens are proven valid by signature and expiry alone. Refresh
    tokens pass the same checks here, but callers must additionally find
    them in the session ledger before trusting them.
    """

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = _utcnow):
        self._config = config
        self._clock = clock

    def create_access(self, claims: AccessClaims) -> AccessToken:
        stamped = claims.model_copy(
            update={"expires_at": self._expiry(self._config.access_ttl)}
        )
        return AccessToken(claims=stamped, token=self._sign(stamped.to_payload()))

    def create_refresh(self, claims: RefreshClaims) -> RefreshToken:
        stamped = claims.model_copy(
            update={
                "token_id": uuid4(),
                "expires_at": self._expiry(self._config.refresh_ttl),
            }
        )
        return RefreshToken(claims=stamped, token=self._sign(stamped.to_payload()))

    def validate_access(self, token: str) -> AccessToken:
        """
        Verify an access token.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: On bad signature, algorithm, or claims
        """
        payload = self._decode(token, ACCESS_REQUIRED_CLAIMS)
        try:
            claims = AccessClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid access claims: {e.error_count()} error(s)")
        return AccessToken(claims=claims, token=token)

    def validate_refresh(self, token: str) -> RefreshToken:
        """
        Verify a refresh token's signature and expiry.

        Parse failures are hard errors; no empty claims are ever returned.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: On bad signature, algorithm, or claims
        """
        payload = self._decode(token, REFRESH_REQUIRED_CLAIMS)
        try:
            claims = RefreshClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid refresh claims: {e.error_count()} error(s)")
        return RefreshToken(claims=claims, token=token)

    def _expiry(self, ttl_seconds: int) -> datetime:
        # exp is serialized in whole seconds; drop the fraction so issued
        # claims compare equal to decoded ones.
        return (self._clock() + timedelta(seconds=ttl_seconds)).replace(microsecond=0)

    def _sign(self, payload: dict[str, Any]) -> str:
        try:
            return jwt.encode(payload, self._config.secret, algorithm=SIGNING_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(str(e)) from e

    def _decode(self, token: str, required: list[str]) -> dict[str, Any]:
        if not token:
            raise InvalidTokenError("Token not presented")
        try:
            return jwt.decode(
                token,
                self._config.secret,
                algorithms=ACCEPTED_ALGORITHMS,
                options={"require": required},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
