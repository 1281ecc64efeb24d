"""Pydantic schemas for account and session endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from schemas.base import CamelModel
from schemas.profile import ProfileResponse


class SignupRequest(CamelModel):
    """Schema for creating a new account."""

    email: str = Field(..., max_length=255)
    username: str = Field(..., max_length=100)
    password: str = Field(..., max_length=128)


class LoginRequest(CamelModel):
    """Schema for authenticating with email and password."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class SwitchProfileRequest(CamelModel):
    """Schema for selecting a different viewer profile."""

    profile_id: UUID


class AccountResponse(CamelModel):
    """
    Account summary returned to clients.

    `password` is always the empty string; the stored hash is never serialized.
    """

    id: UUID
    email: str
    username: str
    image: str
    is_admin: bool
    password: str = ""
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Response for signup, login and identity checks."""

    success: bool = True
    user: AccountResponse
    profile: ProfileResponse | None = None
    message: str | None = None
