"""Continue-watching (playback checkpoint) endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_identity
from models.profile import Profile
from schemas.base import MessageResponse
from schemas.continue_watching import (
    ContinueWatchingCreate,
    ContinueWatchingListResponse,
    ContinueWatchingResponse,
    MediaType,
    ProgressUpdate,
    ProgressUpdateResponse,
)
from services import profile_service, progress_service, session_service
from services.exceptions import ValidationError
from services.progress_service import CheckpointKey
from services.session_service import Identity

router = APIRouter(prefix="/continue-watching", tags=["continue-watching"])


async def _owned_profile_from_query(
    db: AsyncSession,
    identity: Identity,
    profile_id: UUID | None,
) -> Profile:
    """Resolve the `profileId` query parameter to a profile the caller owns."""
    if profile_id is None:
        raise ValidationError("profileId is required", field="profileId")
    return await profile_service.get_profile(db, identity.account.id, profile_id)


@router.post("", response_model=ContinueWatchingResponse, status_code=201)
async def add_to_continue_watching(
    data: ContinueWatchingCreate,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ContinueWatchingResponse:
    """
    Record that playback started for the selected profile.

    Creates the checkpoint at offset 0 (201), or only refreshes lastWatchedAt
    of an existing one (200). Never resets a stored offset.
    """
    profile = session_service.require_profile(identity)
    item, created = await progress_service.upsert_on_first_play(
        db, identity.account.id, profile.id, data,
    )
    if not created:
        response.status_code = 200
    return ContinueWatchingResponse.model_validate(item)


@router.get("", response_model=ContinueWatchingListResponse)
async def list_continue_watching(
    profile_id: UUID | None = Query(default=None, alias="profileId"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ContinueWatchingListResponse:
    """Get up to 20 checkpoints for a profile, most recently watched first."""
    profile = await _owned_profile_from_query(db, identity, profile_id)
    items = await progress_service.list_checkpoints(db, identity.account.id, profile.id)
    return ContinueWatchingListResponse(
        continue_watching=[ContinueWatchingResponse.model_validate(i) for i in items],
    )


@router.get("/{media_id}/{media_type}", response_model=ContinueWatchingResponse)
async def get_continue_watching_item(
    media_id: int,
    media_type: MediaType,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ContinueWatchingResponse:
    """Get the selected profile's checkpoint for one title."""
    profile = session_service.require_profile(identity)
    item = await progress_service.get_checkpoint(
        db, identity.account.id, profile.id, media_id, media_type,
    )
    return ContinueWatchingResponse.model_validate(item)


@router.put("/{media_id}/{media_type}", response_model=ProgressUpdateResponse)
async def update_progress(
    media_id: int,
    media_type: MediaType,
    data: ProgressUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ProgressUpdateResponse:
    """
    Periodic checkpoint from the player (every 5 seconds while playing).

    Overwrites the stored offset. Answers 404 if first play was never recorded;
    checkpoints are never created implicitly.
    """
    profile = session_service.require_profile(identity)
    key = CheckpointKey(identity.account.id, profile.id, media_id, media_type)
    item = await progress_service.record_checkpoint(db, key, data)
    return ProgressUpdateResponse(updated_item=ContinueWatchingResponse.model_validate(item))


@router.delete("/{media_id}/{media_type}", response_model=MessageResponse)
async def remove_from_continue_watching(
    media_id: int,
    media_type: MediaType,
    profile_id: UUID | None = Query(default=None, alias="profileId"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Remove a title from a profile's continue-watching rail."""
    profile = await _owned_profile_from_query(db, identity, profile_id)
    key = CheckpointKey(identity.account.id, profile.id, media_id, media_type)
    await progress_service.remove_checkpoint(db, key)
    return MessageResponse(message="Removed from continue watching successfully")
