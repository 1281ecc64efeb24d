"""Pydantic schemas for search endpoints."""
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from schemas.base import CamelModel

SearchType = Literal["person", "movie", "tv"]


class SearchResponse(CamelModel):
    """Raw catalog results for a search."""

    success: bool = True
    content: list[dict[str, Any]]


class SearchHistoryEntryResponse(CamelModel):
    """One recorded search."""

    id: UUID
    profile_id: UUID
    media_id: int
    search_type: SearchType
    title: str
    image: str | None
    created_at: datetime


class SearchHistoryResponse(CamelModel):
    """A profile's search history, oldest first."""

    success: bool = True
    content: list[SearchHistoryEntryResponse]
