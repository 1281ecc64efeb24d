"""Search history model - the per-account log of top search hits."""
from datetime import datetime
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, UTCDateTime, UUIDv7Mixin, utcnow


class SearchHistoryEntry(Base, UUIDv7Mixin):
    """
    One search recorded against an account, tagged with the searching profile.

    Entries are append-only; they are only removed explicitly or when their
    profile is deleted.
    """

    __tablename__ = "search_history"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
    )
    profile_id: Mapped[UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        index=True,
    )
    media_id: Mapped[int] = mapped_column(Integer, comment="Catalog (TMDB) id of the top hit")
    search_type: Mapped[str] = mapped_column(String(10), comment="person, movie, or tv")
    title: Mapped[str] = mapped_column(String(500))
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        nullable=False,
        index=True,
    )
