"""
IDOR (Insecure Direct Object Reference) security tests.

These tests verify that an account cannot read, modify, select, or delete
profiles and checkpoints belonging to another account by manipulating ids.

OWASP Reference: A01:2021 - Broken Access Control
"""
from datetime import timedelta

from httpx import AsyncClient

from core.config import get_settings
from core.tokens import ProfileSession, encode_session_token
from models.account import Account
from models.continue_watching import ContinueWatchingItem
from models.profile import Profile

API = "/api/v1"


class TestProfileIDOR:
    """Test IDOR protection for profile resources."""

    async def test__get_profile__forbidden(
        self,
        client_as_user_b: AsyncClient,
        user_a_profile: Profile,
    ) -> None:
        response = await client_as_user_b.get(f"{API}/profile/single/{user_a_profile.id}")

        assert response.status_code == 403
        assert "User A" not in response.text

    async def test__list_profiles__forbidden(
        self,
        client_as_user_b: AsyncClient,
        account: Account,
        user_a_profile: Profile,  # noqa: ARG002
    ) -> None:
        response = await client_as_user_b.get(f"{API}/profile/{account.id}")

        assert response.status_code == 403
        assert "User A" not in response.text

    async def test__update_profile__forbidden(
        self,
        client_as_user_b: AsyncClient,
        user_a_profile: Profile,
    ) -> None:
        response = await client_as_user_b.put(
            f"{API}/profile/{user_a_profile.id}", json={"name": "Hacked"},
        )

        assert response.status_code == 403
        assert user_a_profile.name == "User A"

    async def test__delete_profile__forbidden(
        self,
        client_as_user_b: AsyncClient,
        user_a_profile: Profile,
    ) -> None:
        response = await client_as_user_b.delete(f"{API}/profile/{user_a_profile.id}")

        assert response.status_code == 403

    async def test__switch_profile__not_found(
        self,
        client_as_user_b: AsyncClient,
        user_a_profile: Profile,
    ) -> None:
        """Selecting another account's profile is indistinguishable from a missing one."""
        response = await client_as_user_b.post(
            f"{API}/auth/switchProfile", json={"profileId": str(user_a_profile.id)},
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Profile not found for this user"
        assert "set-cookie" not in response.headers


class TestContinueWatchingIDOR:
    """Test IDOR protection for checkpoints."""

    async def test__list__forbidden(
        self,
        client_as_user_b: AsyncClient,
        user_a_checkpoint: ContinueWatchingItem,
    ) -> None:
        response = await client_as_user_b.get(
            f"{API}/continue-watching", params={"profileId": str(user_a_checkpoint.profile_id)},
        )

        assert response.status_code == 403
        assert "Private Movie" not in response.text

    async def test__remove__forbidden(
        self,
        client_as_user_b: AsyncClient,
        user_a_checkpoint: ContinueWatchingItem,
    ) -> None:
        response = await client_as_user_b.delete(
            f"{API}/continue-watching/42/movie",
            params={"profileId": str(user_a_checkpoint.profile_id)},
        )

        assert response.status_code == 403

    async def test__own_profile_does_not_see_other_checkpoints(
        self,
        client_as_user_b: AsyncClient,
        user_a_checkpoint: ContinueWatchingItem,  # noqa: ARG002
    ) -> None:
        """Same media id on User B's own profile resolves to User B's (missing) checkpoint."""
        response = await client_as_user_b.get(f"{API}/continue-watching/42/movie")

        assert response.status_code == 404

        update = await client_as_user_b.put(
            f"{API}/continue-watching/42/movie", json={"currentTime": 999},
        )
        assert update.status_code == 404

    async def test__forged_profile_claim_is_rejected(
        self,
        client: AsyncClient,
        other_account: Account,
        user_a_checkpoint: ContinueWatchingItem,
    ) -> None:
        """A token pairing one account with another account's profile resolves to nothing."""
        token = encode_session_token(
            ProfileSession(account_id=other_account.id, profile_id=user_a_checkpoint.profile_id),
            get_settings().jwt_secret,
            timedelta(hours=1),
        )
        client.cookies.set("jwt-aurastream", token)

        response = await client.get(f"{API}/continue-watching/42/movie")

        assert response.status_code == 404
        assert response.json()["message"] == "Profile not found"
        assert user_a_checkpoint.current_time == 0
