"""
Authentication service implementation.

Ties the token codec, session ledger and identity reconciler together for
each use case: sign-up, sign-in, refresh rotation, Google sign-in, access
validation and settings updates.
"""

import asyncio
import logging
from typing import Union
from uuid import UUID

from modules.identity.interfaces import IIdentityReconciler, IIdentityVerifier
from modules.sessions.interfaces import ISessionLedger
from modules.tokens.exceptions import InvalidTokenError
from modules.tokens.interfaces import ITokenCodec
from modules.tokens.models import new_access_claims, new_refresh_claims
from modules.users.exceptions import EmailAlreadyExistsError
from modules.users.interfaces import IUserRepository
from modules.users.models import (
    ParsePolicy,
    User,
    UserSettings,
    parse_currency,
    parse_weekday,
)
from modules.users.passwords import PasswordHasher
from shared.exceptions import AuthorizationError, NotFoundError

from .exceptions import CouldNotAuthorizeError, InvalidCredentialsError, RevokedTokenError
from .interfaces import IAuthService
from .models import Token, TokenPair

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Holds no state of its own between calls; everything durable lives in
    the user repository and the session ledger. No operation is retried.
    """

    def __init__(
        self,
        users: IUserRepository,
        ledger: ISessionLedger,
        codec: ITokenCodec,
        verifier: IIdentityVerifier,
        reconciler: IIdentityReconciler,
        hasher: PasswordHasher,
        first_day_of_week_policy: Union[ParsePolicy, str] = ParsePolicy.STRICT,
    ):
        self._users = users
        self._ledger = ledger
        self._codec = codec
        self._verifier = verifier
        self._reconciler = reconciler
        self._hasher = hasher
        self._first_day_of_week_policy = ParsePolicy(first_day_of_week_policy)

    async def sign_in(self, email: str, password: str) -> TokenPair:
        try:
            user = await self._users.find_by_email(email)
        except NotFoundError:
            logger.debug("Sign-in for unknown email rejected")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        if not matches:
            logger.debug(f"Sign-in for user {user.id} rejected: wrong password")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} signed in")
        return await self._issue_tokens(user)

    async def sign_up(self, email: str, password: str, name: str) -> TokenPair:
        try:
            await self._users.find_by_email(email)
        except NotFoundError:
            pass
        else:
            raise EmailAlreadyExistsError()

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = User(email=email, name=name, password_hash=password_hash)

        async def insert(users: IUserRepository) -> None:
            await users.add(user)

        await self._users.run_transactional(insert)
        logger.info(f"User {user.id} signed up")
        return await self._issue_tokens(user)

    async def refresh(self, refresh_token: str) -> TokenPair:
        refresh = self._codec.validate_refresh(refresh_token)
        token_id = refresh.claims.token_id
        user_id = refresh.claims.user_id

        if not await self._ledger.exists(token_id, user_id, refresh_token):
            logger.info(f"Rejected unknown or reused refresh token for user {user_id}")
            raise RevokedTokenError()

        # Consume before issuing so a later failure still leaves it revoked.
        await self._ledger.delete(token_id)

        try:
            user = await self._users.find_by_id(user_id)
        except NotFoundError:
            raise InvalidTokenError("Token owner not found")

        logger.debug(f"Rotated refresh token {token_id} for user {user_id}")
        return await self._issue_tokens(user)

    async def federated_sign_in(self, assertion: str) -> TokenPair:
        identity = await self._verifier.verify(assertion)
        user = await self._reconciler.reconcile(identity)
        logger.info(f"User {user.id} signed in with Google")
        return await self._issue_tokens(user)

    async def validate_access(self, access_token: str) -> Token:
        access = self._codec.validate_access(access_token)
        return Token(value=access.token, user_id=access.claims.user_id)

    async def update_settings(
        self,
        user_id: UUID,
        currency: str,
        first_day_of_week: str,
        profile_picture_url: str,
    ) -> User:
        settings = UserSettings(
            currency=parse_currency(currency),
            first_day_of_week=parse_weekday(first_day_of_week, self._first_day_of_week_policy),
            profile_picture_url=profile_picture_url,
        )

        await self._users.find_by_id(user_id)
        return await self._users.update_settings(user_id, settings)

    async def get_user(self, user_id: UUID) -> User:
        return await self._users.find_by_id(user_id)

    async def _issue_tokens(self, user: User) -> TokenPair:
        """
        Sign a fresh access/refresh pair and record the refresh token.

        Both tokens are signed concurrently and both results are collected
        before either is checked, so no failure is lost.
        """
        access, refresh = await asyncio.gather(
            asyncio.to_thread(self._codec.create_access, new_access_claims(user.id)),
            asyncio.to_thread(self._codec.create_refresh, new_refresh_claims(user.id)),
            return_exceptions=True,
        )
        for result in (access, refresh):
            if isinstance(result, AuthorizationError):
                raise result
            if isinstance(result, Exception):
                raise CouldNotAuthorizeError(str(result)) from result
            if isinstance(result, BaseException):
                raise result

        await self._ledger.open_session(refresh)

        return TokenPair(
            access=Token(value=access.token, user_id=access.claims.user_id),
            refresh=Token(value=refresh.token, user_id=refresh.claims.user_id),
        )
