"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cooked_court.core.security import decode_access_token
from cooked_court.db.session import get_db
from cooked_court.models import Post, User
from cooked_court.services.feed import PostNotFoundError, PostStore, get_post_store
from cooked_court.services.judge import JudgeClient, get_judge_client
from cooked_court.services.user_service import get_user_by_username

# Missing credentials are reported as 401 so clients can show their login prompt.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]


def get_post_store_dep() -> PostStore:
    """Return the shared in-memory feed."""
    return get_post_store()


def get_judge_client_dep() -> JudgeClient:
    """Return the shared AI judge client."""
    return get_judge_client()


PostStoreDep = Annotated[PostStore, Depends(get_post_store_dep)]
JudgeClientDep = Annotated[JudgeClient, Depends(get_judge_client_dep)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(
    credentials: HTTPAuthorizationCredentials | None,
    db: Session,
) -> User | None:
    if credentials is None:
        return None
    try:
        username = decode_access_token(credentials.credentials)
    except ValueError as err:
        raise _unauthorized("Could not validate credentials") from err

    user = get_user_by_username(db, username)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: 401 if no token was sent, the token is invalid, or the
            user no longer exists.
    """
    user = _resolve_user(credentials, db)
    if user is None:
        raise _unauthorized("Login required")
    return user


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the viewer if a valid token was sent, otherwise None."""
    return _resolve_user(credentials, db)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_post_or_404(store: PostStore, post_id: str) -> Post:
    try:
        return store.get(post_id)
    except PostNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found") from err
