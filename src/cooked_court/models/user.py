"""SQLAlchemy models for mocked user accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cooked_court.db.session import Base
from cooked_court.db.time import utcnow


class User(Base):
    """User record keyed by username; there is no password."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    profile: Mapped[UserProfile | None] = relationship(
        "UserProfile",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )

    @property
    def display_name(self) -> str:
        """Return the customised display name, falling back to the username."""
        if self.profile is not None and self.profile.display_name:
            return self.profile.display_name
        return self.username

    @property
    def bio(self) -> str:
        return self.profile.bio if self.profile is not None and self.profile.bio else ""

    @property
    def avatar(self) -> str | None:
        return self.profile.avatar if self.profile is not None else None


class UserProfile(Base):
    """Profile customisation kept separate from the identity record."""

    __tablename__ = "user_profile"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Data URI or URL for the avatar image.
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="profile")
