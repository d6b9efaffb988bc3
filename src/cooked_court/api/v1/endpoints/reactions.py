"""Vote, reaction and comment endpoints for the Cooked Court API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from cooked_court.models import Post, PostKind
from cooked_court.schemas.post import (
    BandResponse,
    CommentCreate,
    CommentResponse,
    PostResponse,
    ReactionCountsResponse,
    ReactionResponse,
    VoteCreate,
    band_response,
)
from cooked_court.services import scoring
from cooked_court.services.feed import PostStore

from ..dependencies import CurrentUserDep, PostStoreDep, get_post_or_404

router = APIRouter(prefix="/posts", tags=["reactions"])


def _get_interactive_post(store: PostStore, post_id: str) -> Post:
    post = get_post_or_404(store, post_id)
    if post.is_analyzing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Post is still being judged",
        )
    return post


def _require_kind(post: Post, kind: PostKind, reaction: str) -> None:
    if post.kind != kind:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{reaction} is only available on {kind.value} posts",
        )


def _reaction_response(post: Post, marked: bool | None = None) -> ReactionResponse:
    return ReactionResponse(
        post_id=post.id,
        reactions=ReactionCountsResponse.model_validate(post.reactions),
        marked=marked,
    )


@router.post("/{post_id}/votes", response_model=PostResponse)
async def cast_vote(
    post_id: str,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    store: PostStoreDep,
) -> PostResponse:
    """Cast a cooked-score vote; repeat votes are ignored."""
    with store.lock:
        post = _get_interactive_post(store, post_id)
        scoring.submit_vote(post, vote_data.value, current_user.username)
        return PostResponse.for_viewer(post, current_user.username)


@router.post("/{post_id}/respects", response_model=ReactionResponse)
async def press_f(post_id: str, current_user: CurrentUserDep, store: PostStoreDep) -> ReactionResponse:
    """Pay respects. Unlimited."""
    with store.lock:
        post = _get_interactive_post(store, post_id)
        scoring.toggle_respect(post)
        return _reaction_response(post)


@router.post("/{post_id}/laughs", response_model=ReactionResponse)
async def laugh(post_id: str, current_user: CurrentUserDep, store: PostStoreDep) -> ReactionResponse:
    with store.lock:
        post = _get_interactive_post(store, post_id)
        scoring.add_laugh(post)
        return _reaction_response(post)


@router.post("/{post_id}/w", response_model=ReactionResponse)
async def toggle_w(post_id: str, current_user: CurrentUserDep, store: PostStoreDep) -> ReactionResponse:
    """Toggle the viewer's W on a cost post."""
    with store.lock:
        post = _get_interactive_post(store, post_id)
        _require_kind(post, PostKind.COST, "W")
        marked = scoring.toggle_w(post, current_user.username)
        return _reaction_response(post, marked)


@router.post("/{post_id}/l", response_model=ReactionResponse)
async def toggle_l(post_id: str, current_user: CurrentUserDep, store: PostStoreDep) -> ReactionResponse:
    """Toggle the viewer's L on a shame post."""
    with store.lock:
        post = _get_interactive_post(store, post_id)
        _require_kind(post, PostKind.SHAME, "L")
        marked = scoring.toggle_l(post, current_user.username)
        return _reaction_response(post, marked)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    store: PostStoreDep,
) -> CommentResponse:
    """Append a comment to a post."""
    with store.lock:
        post = get_post_or_404(store, post_id)
        comment = scoring.add_comment(post, current_user.username, comment_data.text)
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment cannot be empty",
        )
    return CommentResponse.model_validate(comment)


@router.get("/{post_id}/band", response_model=BandResponse)
async def get_band(post_id: str, store: PostStoreDep) -> BandResponse:
    """Return the display band for a post's current score."""
    post = _get_interactive_post(store, post_id)
    return band_response(post.display_score, post.kind)
