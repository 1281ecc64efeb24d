"""Catalog search and per-profile search history endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_catalog_client, get_current_identity
from models.profile import Profile
from schemas.base import MessageResponse
from schemas.search import (
    SearchHistoryEntryResponse,
    SearchHistoryResponse,
    SearchResponse,
    SearchType,
)
from services import profile_service, search_service
from services.catalog_client import CatalogClient
from services.exceptions import ValidationError
from services.session_service import Identity

router = APIRouter(prefix="/search", tags=["search"])


async def _owned_profile(
    db: AsyncSession,
    identity: Identity,
    profile_id: UUID | None,
) -> Profile:
    if profile_id is None:
        raise ValidationError("profileId is required", field="profileId")
    return await profile_service.get_profile(db, identity.account.id, profile_id)


@router.get("/history", response_model=SearchHistoryResponse)
async def get_search_history(
    profile_id: UUID | None = Query(default=None, alias="profileId"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> SearchHistoryResponse:
    """Get a profile's search history, oldest first."""
    profile = await _owned_profile(db, identity, profile_id)
    entries = await search_service.get_search_history(db, identity.account.id, profile.id)
    return SearchHistoryResponse(
        content=[SearchHistoryEntryResponse.model_validate(e) for e in entries],
    )


@router.delete("/history/{media_id}", response_model=MessageResponse)
async def remove_search_history_item(
    media_id: int,
    profile_id: UUID | None = Query(default=None, alias="profileId"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Remove a title from a profile's search history."""
    profile = await _owned_profile(db, identity, profile_id)
    await search_service.remove_search_history_item(
        db, identity.account.id, profile.id, media_id,
    )
    return MessageResponse(message="Item removed from search history")


@router.get("/{search_type}/{query}", response_model=SearchResponse)
async def search(
    search_type: SearchType,
    query: str,
    profile_id: UUID | None = Query(default=None, alias="profileId"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
    catalog: CatalogClient = Depends(get_catalog_client),
) -> SearchResponse:
    """
    Search people, movies, or tv shows.

    The top hit is appended to the profile's search history. No results answers 404.
    """
    profile = await _owned_profile(db, identity, profile_id)
    results = await search_service.search(
        db, catalog, identity.account.id, profile.id, search_type, query,
    )
    return SearchResponse(content=results)
