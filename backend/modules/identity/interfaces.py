"""
Identity module interfaces.
"""

from typing import Protocol, runtime_checkable

from modules.users.models import User

from .models import FederatedIdentity


@runtime_checkable
class IIdentityVerifier(Protocol):
    """Interface for checking a federated bearer assertion."""

    async def verify(self, assertion: str) -> FederatedIdentity:
        """
        Validate an assertion and return the identity it carries.

        Raises:
            IdentityVerificationError: On any validation failure
        """
        ...


@runtime_checkable
class IIdentityReconciler(Protocol):
    """Interface for mapping a verified identity onto a local user."""

    async def reconcile(self, identity: FederatedIdentity) -> User:
        """Find or create the local user for the identity."""
        ...
