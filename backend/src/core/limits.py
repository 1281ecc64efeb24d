"""Fixed account policy limits for profiles and continue-watching."""
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountLimits:
    """Usage limits applied to every account."""

    # Item counts
    max_profiles: int
    continue_watching_rail_size: int

    # Field lengths
    max_profile_name_length: int
    min_password_length: int

    # Client sync policy for playback checkpoints (seconds between ticks)
    checkpoint_sync_interval_seconds: int


ACCOUNT_LIMITS = AccountLimits(
    max_profiles=5,
    continue_watching_rail_size=20,
    max_profile_name_length=50,
    min_password_length=6,
    checkpoint_sync_interval_seconds=5,
)

MAX_PROFILES_PER_ACCOUNT = ACCOUNT_LIMITS.max_profiles
CONTINUE_WATCHING_LIMIT = ACCOUNT_LIMITS.continue_watching_rail_size
CHECKPOINT_SYNC_INTERVAL_SECONDS = ACCOUNT_LIMITS.checkpoint_sync_interval_seconds

# Avatars assigned at random to newly created accounts
DEFAULT_AVATARS: tuple[str, ...] = ("/avatar1.png", "/avatar2.png", "/avatar3.png")


def get_account_limits() -> AccountLimits:
    """Get the limits applied to every account."""
    return ACCOUNT_LIMITS
