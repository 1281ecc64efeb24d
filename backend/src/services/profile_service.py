"""Service layer for viewer profile operations."""
import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.authorization import owns
from core.limits import get_account_limits
from models.base import utcnow
from models.continue_watching import ContinueWatchingItem
from models.profile import Profile
from models.search_history import SearchHistoryEntry
from schemas.profile import ProfileCreate, ProfileUpdate
from schemas.validators import validate_profile_name
from services.exceptions import ForbiddenError, NotFoundError, QuotaExceededError

logger = logging.getLogger(__name__)


async def count_profiles(db: AsyncSession, account_id: UUID) -> int:
    """Count the profiles owned by an account."""
    result = await db.execute(
        select(func.count()).select_from(Profile).where(Profile.account_id == account_id),
    )
    return result.scalar_one()


async def create_profile(
    db: AsyncSession,
    account_id: UUID,
    data: ProfileCreate,
) -> Profile:
    """
    Create a profile for an account.

    The account's first profile becomes its default profile.

    Raises:
        ValidationError: If the name is missing or too long.
        QuotaExceededError: If the account already owns the maximum number of profiles.

    Note:
        The count-then-insert is not atomic. Two concurrent creates can both pass
        the check; this is accepted given expected request rates.
    """
    name = validate_profile_name(data.name)

    max_profiles = get_account_limits().max_profiles
    existing = await count_profiles(db, account_id)
    if existing >= max_profiles:
        logger.info("Profile cap reached for account %s", account_id)
        raise QuotaExceededError("profiles", max_profiles)

    profile = Profile(
        account_id=account_id,
        name=name,
        image=data.image or None,
        is_default=existing == 0,
    )
    db.add(profile)
    await db.flush()
    return profile


async def list_profiles(db: AsyncSession, account_id: UUID) -> list[Profile]:
    """Get all profiles owned by an account, oldest first."""
    result = await db.execute(
        select(Profile)
        .where(Profile.account_id == account_id)
        .order_by(Profile.created_at, Profile.id),
    )
    return list(result.scalars().all())


async def find_profile(db: AsyncSession, profile_id: UUID) -> Profile | None:
    """Get a profile by ID without any ownership check."""
    return await db.get(Profile, profile_id)


async def get_profile(db: AsyncSession, account_id: UUID, profile_id: UUID) -> Profile:
    """
    Get a profile the account owns.

    Raises:
        NotFoundError: If the profile does not exist.
        ForbiddenError: If the profile belongs to another account.
    """
    profile = await find_profile(db, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    if not owns(account_id, profile):
        raise ForbiddenError("Forbidden - You can only access your own profiles")
    return profile


async def get_default_profile(db: AsyncSession, account_id: UUID) -> Profile | None:
    """
    Get the profile login should select automatically.

    Prefers the profile flagged as default and falls back to the oldest profile
    when none is flagged (e.g. the default was deleted).
    """
    result = await db.execute(
        select(Profile)
        .where(Profile.account_id == account_id)
        .order_by(Profile.is_default.desc(), Profile.created_at, Profile.id)
        .limit(1),
    )
    return result.scalar_one_or_none()


async def update_profile(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
    data: ProfileUpdate,
) -> Profile:
    """
    Apply a partial update to a profile the account owns.

    Only fields present in the request change; updated_at is always refreshed.
    Validation happens before any field is touched, so a rejected update leaves
    the stored profile intact.
    """
    profile = await get_profile(db, account_id, profile_id)

    update_data = data.model_dump(exclude_unset=True)
    if "name" in update_data:
        if update_data["name"] is None:
            # Explicit null keeps the current name, same as omitting it
            del update_data["name"]
        else:
            update_data["name"] = validate_profile_name(update_data["name"])
    if "image" in update_data and update_data["image"] is None:
        del update_data["image"]

    for field, value in update_data.items():
        setattr(profile, field, value)
    profile.updated_at = utcnow()

    await db.flush()
    return profile


async def delete_profile(db: AsyncSession, account_id: UUID, profile_id: UUID) -> None:
    """
    Delete a profile the account owns, with its checkpoints and search history.

    Raises:
        NotFoundError: If the profile does not exist.
        ForbiddenError: If the profile belongs to another account.
    """
    profile = await get_profile(db, account_id, profile_id)

    await db.execute(
        delete(ContinueWatchingItem).where(ContinueWatchingItem.profile_id == profile.id),
    )
    await db.execute(
        delete(SearchHistoryEntry).where(SearchHistoryEntry.profile_id == profile.id),
    )
    await db.delete(profile)
    await db.flush()
    logger.info("Profile %s deleted for account %s", profile_id, account_id)
