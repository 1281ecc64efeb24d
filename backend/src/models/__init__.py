"""SQLAlchemy models."""
from models.account import Account
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.continue_watching import ContinueWatchingItem
from models.profile import Profile
from models.search_history import SearchHistoryEntry

__all__ = [
    "Account",
    "Base",
    "ContinueWatchingItem",
    "Profile",
    "SearchHistoryEntry",
    "TimestampMixin",
    "UUIDv7Mixin",
]
