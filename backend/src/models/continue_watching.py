"""Continue-watching model for per-profile playback checkpoints."""
from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UTCDateTime, UUIDv7Mixin, utcnow

MEDIA_TYPES = ("movie", "tv")


class ContinueWatchingItem(Base, UUIDv7Mixin, TimestampMixin):
    """
    Playback checkpoint keyed by (account_id, profile_id, media_id, media_type).

    The natural key is not a unique constraint: first-play requests
    upsert by lookup, and the rare duplicate from two concurrent first plays is
    tolerated. Season and episode are only meaningful for tv.
    """

    __tablename__ = "continue_watching"
    __table_args__ = (
        Index(
            "ix_continue_watching_natural_key",
            "account_id",
            "profile_id",
            "media_id",
            "media_type",
        ),
        Index("ix_continue_watching_profile_recency", "profile_id", "last_watched_at"),
        CheckConstraint("current_time_seconds >= 0", name="ck_continue_watching_time"),
        CheckConstraint(
            "media_type IN ('movie', 'tv')",
            name="ck_continue_watching_media_type",
        ),
    )

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
    )
    profile_id: Mapped[UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
    )
    media_id: Mapped[int] = mapped_column(Integer, comment="Catalog (TMDB) id")
    media_type: Mapped[str] = mapped_column(String(10))
    title: Mapped[str] = mapped_column(String(500))
    backdrop_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    poster_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    current_season: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_episode: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # "current_time" collides with the SQL CURRENT_TIME keyword
    current_time: Mapped[float] = mapped_column(
        "current_time_seconds",
        Float,
        default=0.0,
        server_default="0",
    )
    total_duration: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_watched_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        nullable=False,
    )
