"""
Identity reconciliation.

Maps a verified federated identity onto a local user, creating the user
on first sign-in.
"""

import asyncio
import logging

from modules.users.interfaces import IUserRepository
from modules.users.models import User, UserSettings
from modules.users.passwords import PasswordHasher, generate_password
from shared.exceptions import NotFoundError

from .interfaces import IIdentityReconciler
from .models import FederatedIdentity

logger = logging.getLogger(__name__)


class IdentityReconciler(IIdentityReconciler):
    """
    Find-or-create for federated users.

    An existing user only has the profile picture synced; every other
    setting is kept. A new user gets default settings plus the picture and
    a hash of a random password that is never revealed, so the account has
    no usable local password.
    """

    def __init__(self, users: IUserRepository, hasher: PasswordHasher):
        self._users = users
        self._hasher = hasher

    async def reconcile(self, identity: FederatedIdentity) -> User:
        try:
            existing = await self._users.find_by_email(identity.email)
        except NotFoundError:
            return await self._create(identity)

        settings = existing.settings.with_picture(identity.picture)
        logger.debug(f"Federated sign-in for existing user {existing.id}")
        return await self._users.update_settings(existing.id, settings)

    async def _create(self, identity: FederatedIdentity) -> User:
        password_hash = await asyncio.to_thread(self._hasher.hash, generate_password())
        user = User(
            email=identity.email,
            name=identity.name,
            password_hash=password_hash,
            settings=UserSettings().with_picture(identity.picture),
        )
        await self._users.add(user)
        logger.info(f"Created federated user {user.id}")
        return user
