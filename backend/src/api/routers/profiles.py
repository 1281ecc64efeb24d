"""Viewer profile CRUD endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_identity, get_settings
from core.auth import set_session_cookie
from core.config import Settings
from schemas.base import MessageResponse
from schemas.profile import (
    ProfileCreate,
    ProfileEnvelope,
    ProfileListEnvelope,
    ProfileResponse,
    ProfileUpdate,
)
from services import profile_service, session_service
from services.exceptions import ForbiddenError
from services.session_service import Identity

router = APIRouter(prefix="/profile", tags=["profiles"])


@router.post("", response_model=ProfileEnvelope, status_code=201)
async def create_profile(
    data: ProfileCreate,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ProfileEnvelope:
    """
    Create a profile and select it.

    The session cookie is upgraded to the new profile in the same response.
    Accounts are limited to 5 profiles.
    """
    profile = await profile_service.create_profile(db, identity.account.id, data)
    set_session_cookie(response, session_service.select_profile(identity.session, profile), settings)
    return ProfileEnvelope(
        message="Profile created successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("/single/{profile_id}", response_model=ProfileEnvelope)
async def get_profile(
    profile_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ProfileEnvelope:
    """Get one of the caller's profiles."""
    profile = await profile_service.get_profile(db, identity.account.id, profile_id)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))


@router.get("/{account_id}", response_model=ProfileListEnvelope)
async def list_profiles(
    account_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ProfileListEnvelope:
    """List an account's profiles. Callers can only list their own account."""
    if account_id != identity.account.id:
        raise ForbiddenError("Forbidden - You can only access your own profiles")
    profiles = await profile_service.list_profiles(db, account_id)
    return ProfileListEnvelope(profiles=[ProfileResponse.model_validate(p) for p in profiles])


@router.put("/{profile_id}", response_model=ProfileEnvelope)
async def update_profile(
    profile_id: UUID,
    data: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> ProfileEnvelope:
    """Update a profile's name and/or avatar. Omitted fields keep their value."""
    profile = await profile_service.update_profile(db, identity.account.id, profile_id, data)
    return ProfileEnvelope(
        message="Profile updated successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.delete("/{profile_id}", response_model=MessageResponse)
async def delete_profile(
    profile_id: UUID,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """
    Delete a profile along with its continue-watching and search history.

    Deleting the currently selected profile downgrades the session cookie to
    account scope.
    """
    await profile_service.delete_profile(db, identity.account.id, profile_id)
    grant = session_service.after_profile_deleted(identity.session, profile_id)
    if grant is not None:
        set_session_cookie(response, grant, settings)
    return MessageResponse(message="Profile deleted successfully")
