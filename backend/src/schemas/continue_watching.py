"""Pydantic schemas for continue-watching endpoints."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field

from schemas.base import CamelModel

MediaType = Literal["movie", "tv"]


class ContinueWatchingCreate(CamelModel):
    """Schema for the first-play signal that creates or touches a checkpoint."""

    media_id: int = Field(..., ge=1)
    media_type: MediaType
    title: str = Field(..., min_length=1, max_length=500)
    backdrop_path: str | None = Field(default=None, max_length=500)
    poster_path: str | None = Field(default=None, max_length=500)
    current_season: int | None = Field(default=None, ge=1)
    current_episode: int | None = Field(default=None, ge=1)


class ProgressUpdate(CamelModel):
    """Schema for a periodic playback checkpoint."""

    current_time: float = Field(..., ge=0, description="Playback offset in seconds")
    current_season: int | None = Field(default=None, ge=1)
    current_episode: int | None = Field(default=None, ge=1)
    total_duration: float | None = Field(default=None, ge=0)


class ContinueWatchingResponse(CamelModel):
    """Schema for a stored checkpoint."""

    id: UUID
    account_id: UUID
    profile_id: UUID
    media_id: int
    media_type: MediaType
    title: str
    backdrop_path: str | None
    poster_path: str | None
    current_season: int | None
    current_episode: int | None
    current_time: float
    total_duration: float | None
    last_watched_at: datetime
    created_at: datetime
    updated_at: datetime


class ContinueWatchingListResponse(CamelModel):
    """The continue-watching rail for one profile, most recent first."""

    continue_watching: list[ContinueWatchingResponse]


class ProgressUpdateResponse(CamelModel):
    """Response for a successful periodic checkpoint."""

    message: str = "Progress updated successfully"
    updated_item: ContinueWatchingResponse
