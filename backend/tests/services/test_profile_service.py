"""Tests for viewer profile operations."""
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.account import Account
from models.profile import Profile
from schemas.profile import ProfileCreate, ProfileUpdate
from services import profile_service
from services.exceptions import (
    ForbiddenError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)


async def _create(db_session: AsyncSession, account: Account, name: str) -> Profile:
    return await profile_service.create_profile(db_session, account.id, ProfileCreate(name=name))


# =============================================================================
# create_profile
# =============================================================================


async def test__create_profile__first_is_default(
    db_session: AsyncSession,
    account: Account,
) -> None:
    first = await _create(db_session, account, "Alice")
    second = await _create(db_session, account, "Bob")

    assert first.is_default is True
    assert second.is_default is False
    assert first.account_id == account.id


async def test__create_profile__strips_name(db_session: AsyncSession, account: Account) -> None:
    profile = await _create(db_session, account, "  Alice  ")

    assert profile.name == "Alice"


async def test__create_profile__empty_image_stored_as_none(
    db_session: AsyncSession,
    account: Account,
) -> None:
    profile = await profile_service.create_profile(
        db_session, account.id, ProfileCreate(name="Alice", image=""),
    )

    assert profile.image is None


async def test__create_profile__cap_is_five(db_session: AsyncSession, account: Account) -> None:
    for i in range(5):
        await _create(db_session, account, f"Viewer {i}")

    with pytest.raises(QuotaExceededError) as exc_info:
        await _create(db_session, account, "Sixth")

    assert str(exc_info.value) == "User cannot have more than 5 profiles."
    assert exc_info.value.status_code == 400
    assert await profile_service.count_profiles(db_session, account.id) == 5


async def test__create_profile__cap_is_per_account(
    db_session: AsyncSession,
    account: Account,
    other_account: Account,
) -> None:
    for i in range(5):
        await _create(db_session, account, f"Viewer {i}")

    profile = await _create(db_session, other_account, "Theirs")

    assert profile.account_id == other_account.id


@pytest.mark.parametrize("name", [None, "", "   "])
async def test__create_profile__name_required(
    db_session: AsyncSession,
    account: Account,
    name: str | None,
) -> None:
    with pytest.raises(ValidationError, match="Profile name is required"):
        await profile_service.create_profile(db_session, account.id, ProfileCreate(name=name))


# =============================================================================
# get_profile / list_profiles / get_default_profile
# =============================================================================


async def test__get_profile__ownership(
    db_session: AsyncSession,
    account: Account,
    other_account: Account,
) -> None:
    profile = await _create(db_session, account, "Alice")

    assert await profile_service.get_profile(db_session, account.id, profile.id) is profile
    with pytest.raises(ForbiddenError):
        await profile_service.get_profile(db_session, other_account.id, profile.id)
    with pytest.raises(NotFoundError, match="Profile not found"):
        await profile_service.get_profile(db_session, account.id, uuid4())


async def test__list_profiles__only_own(
    db_session: AsyncSession,
    account: Account,
    other_account: Account,
) -> None:
    await _create(db_session, account, "Alice")
    await _create(db_session, account, "Bob")
    await _create(db_session, other_account, "Theirs")

    profiles = await profile_service.list_profiles(db_session, account.id)

    assert [p.name for p in profiles] == ["Alice", "Bob"]


async def test__get_default_profile__none_without_profiles(
    db_session: AsyncSession,
    account: Account,
) -> None:
    assert await profile_service.get_default_profile(db_session, account.id) is None


async def test__get_default_profile__falls_back_to_oldest(
    db_session: AsyncSession,
    account: Account,
) -> None:
    first = await _create(db_session, account, "Alice")
    second = await _create(db_session, account, "Bob")
    await _create(db_session, account, "Carol")

    assert await profile_service.get_default_profile(db_session, account.id) is first

    await profile_service.delete_profile(db_session, account.id, first.id)

    assert await profile_service.get_default_profile(db_session, account.id) is second


# =============================================================================
# update_profile
# =============================================================================


async def test__update_profile__partial(db_session: AsyncSession, account: Account) -> None:
    profile = await profile_service.create_profile(
        db_session, account.id, ProfileCreate(name="Alice", image="/a.png"),
    )
    original_updated_at = profile.updated_at

    updated = await profile_service.update_profile(
        db_session, account.id, profile.id, ProfileUpdate(image="/b.png"),
    )

    assert updated.name == "Alice"
    assert updated.image == "/b.png"
    assert updated.updated_at >= original_updated_at


async def test__update_profile__explicit_null_keeps_values(
    db_session: AsyncSession,
    account: Account,
) -> None:
    profile = await profile_service.create_profile(
        db_session, account.id, ProfileCreate(name="Alice", image="/a.png"),
    )

    updated = await profile_service.update_profile(
        db_session, account.id, profile.id, ProfileUpdate(name=None, image=None),
    )

    assert updated.name == "Alice"
    assert updated.image == "/a.png"


async def test__update_profile__rejects_blank_name(
    db_session: AsyncSession,
    account: Account,
) -> None:
    profile = await _create(db_session, account, "Alice")

    with pytest.raises(ValidationError):
        await profile_service.update_profile(
            db_session, account.id, profile.id, ProfileUpdate(name="  ", image="/x.png"),
        )

    assert profile.name == "Alice"
    assert profile.image is None


async def test__update_profile__foreign_is_forbidden(
    db_session: AsyncSession,
    account: Account,
    other_account: Account,
) -> None:
    profile = await _create(db_session, account, "Alice")

    with pytest.raises(ForbiddenError):
        await profile_service.update_profile(
            db_session, other_account.id, profile.id, ProfileUpdate(name="Mine"),
        )


# =============================================================================
# delete_profile
# =============================================================================


async def test__delete_profile__removes_profile(
    db_session: AsyncSession,
    account: Account,
) -> None:
    profile = await _create(db_session, account, "Alice")

    await profile_service.delete_profile(db_session, account.id, profile.id)

    assert await profile_service.find_profile(db_session, profile.id) is None
    assert await profile_service.count_profiles(db_session, account.id) == 0


async def test__delete_profile__foreign_is_forbidden(
    db_session: AsyncSession,
    account: Account,
    other_account: Account,
) -> None:
    profile = await _create(db_session, account, "Alice")

    with pytest.raises(ForbiddenError):
        await profile_service.delete_profile(db_session, other_account.id, profile.id)

    assert await profile_service.find_profile(db_session, profile.id) is profile
