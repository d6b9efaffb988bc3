"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from cooked_court.schemas.post import PostResponse
from cooked_court.schemas.user import (
    ProfileStatsResponse,
    ProfileUpdateRequest,
    ScoreDistributionResponse,
    UserResponse,
)
from cooked_court.services.profile_stats import compute_profile_stats
from cooked_court.services.user_service import update_profile

from ..dependencies import CurrentUserDep, OptionalUserDep, PostStoreDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the logged-in user's record."""
    return UserResponse.model_validate(current_user)


@router.patch("/me/profile", response_model=UserResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserResponse:
    """Update display name, bio or avatar; omitted fields stay unchanged."""
    user = update_profile(db, current_user, payload)
    return UserResponse.model_validate(user)


@router.get("/{username}/posts", response_model=list[PostResponse])
async def get_user_posts(
    username: str,
    store: PostStoreDep,
    viewer: OptionalUserDep,
) -> list[PostResponse]:
    """List a user's posts, newest first."""
    viewer_name = viewer.username if viewer else None
    return [PostResponse.for_viewer(post, viewer_name) for post in store.by_author(username)]


@router.get("/{username}/stats", response_model=ProfileStatsResponse)
async def get_user_stats(username: str, store: PostStoreDep) -> ProfileStatsResponse:
    """Return aggregate cooked statistics for a user's posts."""
    stats = compute_profile_stats(store.by_author(username))
    return ProfileStatsResponse(
        username=username,
        total_posts=stats.total_posts,
        total_respects=stats.total_respects,
        total_wins=stats.total_wins,
        total_losses=stats.total_losses,
        total_votes=stats.total_votes,
        average_score=stats.average_score,
        distribution=ScoreDistributionResponse.model_validate(stats.distribution),
        rank_title=stats.rank_title,
    )
