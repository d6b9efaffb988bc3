"""Authentication endpoints for the Cooked Court API.

Login is mocked: any well-formed username is accepted and the user record is
created on first use. There is no password verification.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from cooked_court.core.security import create_access_token
from cooked_court.schemas.user import LoginRequest, LoginResponse, UserResponse
from cooked_court.services.user_service import get_or_create_user

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post(
    "/login",
    summary="Log in (or sign up) with a username",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def login_user(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Issue a bearer token for ``payload.username``."""
    user, created = get_or_create_user(db, payload.username)
    access_token = create_access_token(user.username)
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        created=created,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", summary="Log out")
async def logout_user(current_user: CurrentUserDep) -> dict[str, str]:
    """Acknowledge a logout; tokens are stateless so the client just drops it."""
    logger.debug("User %s logged out", current_user.username)
    return {"status": "logged_out"}
