"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
from unittest.mock import AsyncMock
from uuid import UUID, uuid4
import jwt  # PyJWT

from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, reset_container
from modules.auth.service import AuthService
from modules.identity.interfaces import IIdentityVerifier
from modules.identity.service import IdentityReconciler
from modules.sessions.memory import InMemoryRefreshTokenRepository
from modules.sessions.service import SessionLedger
from modules.tokens.codec import TokenCodec, TokenConfig
from modules.users.memory import InMemoryUserRepository
from modules.users.passwords import PasswordHasher
from shared.config import get_settings


# Test JWT secret (only for testing). 32 bytes, the HS256 minimum PyJWT accepts quietly.
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

TEST_ACCESS_TTL = 900
TEST_REFRESH_TTL = 3600
TEST_MAX_SESSIONS = 3

# Lowest bcrypt cost; keeps hashing fast in tests.
TEST_BCRYPT_ROUNDS = 4


def create_test_token(
    user_id: Optional[UUID] = None,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    algorithm: str = "HS256",
    **extra_claims,
) -> str:
    """
    Create a test access token.

    Args:
        user_id: User ID for the UserId claim (random if omitted)
        expired: If True, creates an expired token
        secret: Signing secret
        algorithm: Signing algorithm
        extra_claims: Additional claims to include

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "UserId": str(user_id or uuid4()),
        "exp": int(exp.timestamp()),
        **extra_claims,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(
        secret=TEST_JWT_SECRET,
        access_ttl=TEST_ACCESS_TTL,
        refresh_ttl=TEST_REFRESH_TTL,
    )


@pytest.fixture
def codec(token_config: TokenConfig) -> TokenCodec:
    return TokenCodec(token_config)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def refresh_repository() -> InMemoryRefreshTokenRepository:
    return InMemoryRefreshTokenRepository()


@pytest.fixture
def ledger(refresh_repository: InMemoryRefreshTokenRepository) -> SessionLedger:
    return SessionLedger(refresh_repository, max_sessions=TEST_MAX_SESSIONS)


@pytest.fixture
def verifier() -> AsyncMock:
    """Identity verifier stub; set verify.return_value / side_effect per test."""
    return AsyncMock(spec=IIdentityVerifier)


@pytest.fixture
def reconciler(user_repository, hasher) -> IdentityReconciler:
    return IdentityReconciler(user_repository, hasher)


@pytest.fixture
def auth_service(user_repository, ledger, codec, verifier, reconciler, hasher) -> AuthService:
    """AuthService over in-memory storage with a stubbed Google verifier."""
    return AuthService(
        users=user_repository,
        ledger=ledger,
        codec=codec,
        verifier=verifier,
        reconciler=reconciler,
        hasher=hasher,
    )


@pytest.fixture
def test_user_id() -> UUID:
    """Provide a consistent test user ID."""
    return UUID("6f1c2a52-3a5c-4d8e-9a43-2c1f0d7b9e11")


@pytest.fixture
def auth_token(test_user_id: UUID) -> str:
    """Create a valid access token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def client(auth_service: AuthService) -> TestClient:
    """Test client whose routes use the in-memory auth_service."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    return TestClient(app)
