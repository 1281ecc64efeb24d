"""Account model for credentialed identities."""
from sqlalchemy import Boolean, String, false
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


class Account(Base, UUIDv7Mixin, TimestampMixin):
    """
    Account model - the identity that signs up and logs in.

    The password is stored as a bcrypt hash and never leaves the service layer.
    Viewer profiles and search history reference the account by id.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(60), comment="bcrypt hash")
    image: Mapped[str] = mapped_column(String(500), default="", server_default="")
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
    )
