"""Pydantic schemas for profile endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from schemas.base import CamelModel


class ProfileCreate(CamelModel):
    """Schema for creating a new profile."""

    name: str | None = Field(default=None, max_length=200)
    image: str | None = Field(
        default=None,
        max_length=500,
        description="Avatar URL or path; the image itself lives in external storage",
    )


class ProfileUpdate(CamelModel):
    """Schema for updating a profile. Only supplied fields change."""

    name: str | None = Field(default=None, max_length=200)
    image: str | None = Field(default=None, max_length=500)


class ProfileResponse(CamelModel):
    """Schema for profile responses."""

    id: UUID
    account_id: UUID
    name: str
    image: str | None
    is_default: bool
    created_at: datetime
    updated_at: datetime


class ProfileEnvelope(CamelModel):
    """Single profile wrapped with a status flag."""

    success: bool = True
    message: str | None = None
    profile: ProfileResponse


class ProfileListEnvelope(CamelModel):
    """All profiles owned by an account."""

    success: bool = True
    profiles: list[ProfileResponse]
