"""
Identity module.

Federated (Google) sign-in: verifies identity assertions and reconciles
them with local user records.

Public API:
- IIdentityVerifier, IIdentityReconciler: Interfaces
- GoogleIdentityVerifier: Google ID token verification
- IdentityReconciler: Find-or-create for federated users
- FederatedIdentity: Verified identity claims
- IdentityVerificationError: Raised on any verification failure
"""

from .exceptions import IdentityVerificationError
from .interfaces import IIdentityReconciler, IIdentityVerifier
from .models import FederatedIdentity
from .service import IdentityReconciler
from .verifier import GoogleIdentityVerifier

__all__ = [
    # Interfaces
    "IIdentityVerifier",
    "IIdentityReconciler",
    # Implementations
    "GoogleIdentityVerifier",
    "IdentityReconciler",
    # Models
    "FederatedIdentity",
    # Exceptions
    "IdentityVerificationError",
]
