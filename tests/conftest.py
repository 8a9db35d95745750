"""Root test fixtures shared across all test types.

Unit and API tests run against the in-memory document store and the local
auth provider. Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("STORE_BACKEND", "memory")
# Cheap hashing for tests
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.chancery.api.dependencies import (
    get_auth_provider,
    get_document_store,
    reset_backend,
)
from src.chancery.backend import LocalAuthProvider, MemoryDocumentStore
from src.chancery.core.config import get_settings
from src.chancery.main import create_app
from src.chancery.repositories import (
    InvitationRepository,
    ReconciliationRepository,
    UserProfileRepository,
)
from src.chancery.services import (
    ApprovalService,
    AuthActionService,
    InviteService,
    ReconciliationService,
    RegistrationService,
)

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# --- Backend Fixtures ---


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def auth_provider(store: MemoryDocumentStore) -> LocalAuthProvider:
    return LocalAuthProvider(store)


@pytest.fixture
def profile_repo(store: MemoryDocumentStore) -> UserProfileRepository:
    return UserProfileRepository(store)


@pytest.fixture
def invite_repo(store: MemoryDocumentStore) -> InvitationRepository:
    return InvitationRepository(store)


@pytest.fixture
def reconciliation_repo(store: MemoryDocumentStore) -> ReconciliationRepository:
    return ReconciliationRepository(store)


# --- Service Fixtures ---


@pytest.fixture
def reconciliation_service(reconciliation_repo: ReconciliationRepository) -> ReconciliationService:
    return ReconciliationService(reconciliation_repo)


@pytest.fixture
def registration_service(
    auth_provider: LocalAuthProvider,
    profile_repo: UserProfileRepository,
    invite_repo: InvitationRepository,
    reconciliation_service: ReconciliationService,
) -> RegistrationService:
    return RegistrationService(auth_provider, profile_repo, invite_repo, reconciliation_service)


@pytest.fixture
def invite_service(invite_repo: InvitationRepository) -> InviteService:
    return InviteService(invite_repo)


@pytest.fixture
def approval_service(profile_repo: UserProfileRepository) -> ApprovalService:
    return ApprovalService(profile_repo)


@pytest.fixture
def auth_action_service(auth_provider: LocalAuthProvider) -> AuthActionService:
    return AuthActionService(auth_provider)


# --- HTTP Fixtures ---


@pytest.fixture
def client(store: MemoryDocumentStore, auth_provider: LocalAuthProvider) -> Iterator[TestClient]:
    """Test client wired to this test's store and auth provider."""
    app = create_app()
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    reset_backend()
