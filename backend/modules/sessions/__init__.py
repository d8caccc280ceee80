"""
Sessions module.

Keeps the server-side record of refresh tokens that makes them revocable,
and caps how many a user may hold at once.

Public API:
- ISessionLedger, IRefreshTokenRepository: Interfaces
- SessionLedger: Cap and rotation bookkeeping
- PostgresRefreshTokenRepository / InMemoryRefreshTokenRepository: Storage
- SessionRecord: Stored row model
"""

from .interfaces import IRefreshTokenRepository, ISessionLedger
from .memory import InMemoryRefreshTokenRepository
from .models import SessionRecord
from .repository import PostgresRefreshTokenRepository
from .service import SessionLedger

__all__ = [
    # Interfaces
    "ISessionLedger",
    "IRefreshTokenRepository",
    # Implementations
    "SessionLedger",
    "PostgresRefreshTokenRepository",
    "InMemoryRefreshTokenRepository",
    # Models
    "SessionRecord",
]
