"""
Service layer for continue-watching checkpoints.

A checkpoint is keyed by (account_id, profile_id, media_id, media_type). The
client signals first play once, then overwrites the offset on a fixed interval
while media plays. Writes are last-write-wins; nothing is merged or averaged.
"""
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.limits import get_account_limits
from models.base import utcnow
from models.continue_watching import ContinueWatchingItem
from schemas.continue_watching import ContinueWatchingCreate, ProgressUpdate
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Item not found in continue watching"


@dataclass(frozen=True)
class CheckpointKey:
    """Natural key of a checkpoint."""

    account_id: UUID
    profile_id: UUID
    media_id: int
    media_type: str


def _key_filter(key: CheckpointKey) -> list:
    return [
        ContinueWatchingItem.account_id == key.account_id,
        ContinueWatchingItem.profile_id == key.profile_id,
        ContinueWatchingItem.media_id == key.media_id,
        ContinueWatchingItem.media_type == key.media_type,
    ]


async def find_checkpoint(db: AsyncSession, key: CheckpointKey) -> ContinueWatchingItem | None:
    """
    Get the checkpoint for a key.

    If a first-play race left duplicates, the most recently watched one wins.
    """
    result = await db.execute(
        select(ContinueWatchingItem)
        .where(*_key_filter(key))
        .order_by(
            ContinueWatchingItem.last_watched_at.desc(),
            ContinueWatchingItem.id.desc(),
        )
        .limit(1),
    )
    return result.scalar_one_or_none()


async def upsert_on_first_play(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
    data: ContinueWatchingCreate,
) -> tuple[ContinueWatchingItem, bool]:
    """
    Create a checkpoint at offset 0, or touch the existing one.

    Repeating the call never regresses a stored offset: an existing checkpoint
    only gets its last_watched_at refreshed.

    Returns:
        Tuple of (checkpoint, created).
    """
    key = CheckpointKey(account_id, profile_id, data.media_id, data.media_type)
    existing = await find_checkpoint(db, key)
    if existing is not None:
        existing.last_watched_at = utcnow()
        await db.flush()
        return existing, False

    is_tv = data.media_type == "tv"
    item = ContinueWatchingItem(
        account_id=account_id,
        profile_id=profile_id,
        media_id=data.media_id,
        media_type=data.media_type,
        title=data.title,
        backdrop_path=data.backdrop_path,
        poster_path=data.poster_path,
        current_season=(data.current_season or 1) if is_tv else None,
        current_episode=(data.current_episode or 1) if is_tv else None,
        current_time=0.0,
    )
    db.add(item)
    await db.flush()
    logger.debug("Checkpoint created for profile %s media %s", profile_id, data.media_id)
    return item, True


async def record_checkpoint(
    db: AsyncSession,
    key: CheckpointKey,
    data: ProgressUpdate,
) -> ContinueWatchingItem:
    """
    Overwrite the playback offset of an existing checkpoint.

    Season and episode are only applied to tv checkpoints. total_duration is
    only changed when supplied.

    Raises:
        NotFoundError: If first play was never recorded for the key.
    """
    item = await find_checkpoint(db, key)
    if item is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    item.current_time = data.current_time
    if key.media_type == "tv":
        if data.current_season is not None:
            item.current_season = data.current_season
        if data.current_episode is not None:
            item.current_episode = data.current_episode
    if data.total_duration is not None:
        item.total_duration = data.total_duration

    now = utcnow()
    item.last_watched_at = now
    item.updated_at = now
    await db.flush()
    return item


async def list_checkpoints(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
    limit: int | None = None,
) -> list[ContinueWatchingItem]:
    """Get a profile's checkpoints, most recently watched first, capped at the rail size."""
    rail_size = get_account_limits().continue_watching_rail_size
    limit = rail_size if limit is None else max(0, min(limit, rail_size))
    result = await db.execute(
        select(ContinueWatchingItem)
        .where(
            ContinueWatchingItem.account_id == account_id,
            ContinueWatchingItem.profile_id == profile_id,
        )
        .order_by(
            ContinueWatchingItem.last_watched_at.desc(),
            ContinueWatchingItem.id.desc(),
        )
        .limit(limit),
    )
    return list(result.scalars().all())


async def get_checkpoint(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
    media_id: int,
    media_type: str | None = None,
) -> ContinueWatchingItem:
    """
    Get one checkpoint for a profile.

    media_type narrows the lookup when given; without it the most recent
    checkpoint for the media id is returned.

    Raises:
        NotFoundError: If no checkpoint matches.
    """
    filters = [
        ContinueWatchingItem.account_id == account_id,
        ContinueWatchingItem.profile_id == profile_id,
        ContinueWatchingItem.media_id == media_id,
    ]
    if media_type is not None:
        filters.append(ContinueWatchingItem.media_type == media_type)

    result = await db.execute(
        select(ContinueWatchingItem)
        .where(*filters)
        .order_by(ContinueWatchingItem.last_watched_at.desc())
        .limit(1),
    )
    item = result.scalar_one_or_none()
    if item is None:
        raise NotFoundError("Continue watching item not found")
    return item


async def remove_checkpoint(db: AsyncSession, key: CheckpointKey) -> None:
    """
    Delete the checkpoint for a key.

    Raises:
        NotFoundError: If no checkpoint matches.
    """
    item = await find_checkpoint(db, key)
    if item is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    await db.delete(item)
    await db.flush()
