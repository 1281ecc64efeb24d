"""
Security test fixtures.

These fixtures enable testing security scenarios like IDOR (Insecure Direct
Object Reference) by creating two accounts with their own profiles and
checkpoints, and a client authenticated as the second account.
"""
from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.tokens import ProfileSession, encode_session_token
from models.account import Account
from models.continue_watching import ContinueWatchingItem
from models.profile import Profile
from schemas.continue_watching import ContinueWatchingCreate
from schemas.profile import ProfileCreate
from services import profile_service, progress_service


@pytest.fixture
async def user_a_profile(db_session: AsyncSession, account: Account) -> Profile:
    """Create a profile belonging to User A (the `account` fixture)."""
    return await profile_service.create_profile(
        db_session, account.id, ProfileCreate(name="User A"),
    )


@pytest.fixture
async def user_b_profile(db_session: AsyncSession, other_account: Account) -> Profile:
    """Create a profile belonging to User B (the `other_account` fixture)."""
    return await profile_service.create_profile(
        db_session, other_account.id, ProfileCreate(name="User B"),
    )


@pytest.fixture
async def user_a_checkpoint(
    db_session: AsyncSession,
    user_a_profile: Profile,
) -> ContinueWatchingItem:
    """Create a checkpoint on User A's profile."""
    item, _ = await progress_service.upsert_on_first_play(
        db_session,
        user_a_profile.account_id,
        user_a_profile.id,
        ContinueWatchingCreate(media_id=42, media_type="movie", title="Private Movie"),
    )
    return item


@pytest.fixture
async def client_as_user_b(
    app_with_overrides,  # noqa: ANN001
    user_b_profile: Profile,
) -> AsyncGenerator[AsyncClient]:
    """Client holding a valid profile-scoped session for User B."""
    token = encode_session_token(
        ProfileSession(account_id=user_b_profile.account_id, profile_id=user_b_profile.id),
        get_settings().jwt_secret,
        timedelta(hours=1),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app_with_overrides),
        base_url="http://test",
        cookies={"jwt-aurastream": token},
    ) as test_client:
        yield test_client
