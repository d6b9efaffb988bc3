"""CRUD-style helpers for mocked user accounts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from cooked_court.models import User, UserProfile
from cooked_court.schemas.user import ProfileUpdateRequest

__all__ = [
    "get_user_by_username",
    "get_or_create_user",
    "update_profile",
]

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return a single user by username."""
    return db.query(User).filter(User.username == username).first()


def get_or_create_user(db: Session, username: str) -> tuple[User, bool]:
    """Return the user named ``username``, creating it on first login."""
    user = get_user_by_username(db, username)
    if user is not None:
        return user, False

    user = User(username=username)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user record for %s", username)
    return user, True


def update_profile(db: Session, user: User, update_data: ProfileUpdateRequest) -> User:
    """Apply partial profile customisation to ``user``."""
    if user.profile is None:
        user.profile = UserProfile(user_id=user.id)

    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        setattr(user.profile, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user
