"""Schema for account limits response."""
from schemas.base import CamelModel


class AccountLimitsResponse(CamelModel):
    """Response model for the limits applied to every account."""

    success: bool = True

    # Item counts
    max_profiles: int
    continue_watching_rail_size: int

    # Field lengths
    max_profile_name_length: int
    min_password_length: int

    # Client sync policy
    checkpoint_sync_interval_seconds: int
