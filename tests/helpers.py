"""Test helper functions for common data creation patterns."""

import asyncio

from src.chancery.backend import DocumentStore, LocalAuthProvider
from src.chancery.models import Invitation, UserProfile
from src.chancery.repositories import InvitationRepository, UserProfileRepository
from tests.factories import DEFAULT_TEST_PASSWORD


async def create_account_with_profile(
    auth_provider: LocalAuthProvider,
    store: DocumentStore,
    profile: UserProfile,
    password: str = DEFAULT_TEST_PASSWORD,
) -> tuple[UserProfile, dict[str, str]]:
    """Create a credential, store the profile under its uid, and sign in.

    Args:
        auth_provider: Provider the account is created in
        store: Store the profile is written to
        profile: Profile to store; its uid is replaced by the provider's
        password: Account password

    Returns:
        Tuple of (stored profile, Authorization headers)
    """
    uid = await auth_provider.create_account(profile.email, password)
    stored = profile.model_copy(update={"uid": uid})
    await UserProfileRepository(store).add(stored)
    token = await auth_provider.issue_session(uid)
    return stored, {"Authorization": f"Bearer {token}"}


def signed_in(
    auth_provider: LocalAuthProvider, store: DocumentStore, profile: UserProfile
) -> tuple[UserProfile, dict[str, str]]:
    """Sync wrapper for TestClient tests."""
    return asyncio.run(create_account_with_profile(auth_provider, store, profile))


def seed_invite(store: DocumentStore, invite: Invitation) -> Invitation:
    return asyncio.run(InvitationRepository(store).add(invite))


def load_profile(store: DocumentStore, uid: str) -> UserProfile | None:
    return asyncio.run(UserProfileRepository(store).get_by_id(uid))
