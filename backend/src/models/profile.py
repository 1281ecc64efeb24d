"""Profile model for viewer personas under an account."""
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, false
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


class Profile(Base, UUIDv7Mixin, TimestampMixin):
    """
    Profile model - a named viewer persona owned by one account.

    account_id never changes after creation. At most one profile per account has
    is_default set; login selects it automatically.
    """

    __tablename__ = "profiles"

    account_id: Mapped[UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(50))
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_default: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
    )
