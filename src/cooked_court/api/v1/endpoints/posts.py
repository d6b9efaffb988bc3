"""Post submission and feed endpoints for the Cooked Court API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Query, status

from cooked_court.core.settings import settings
from cooked_court.models import Post, PostKind
from cooked_court.schemas.post import PostCreate, PostResponse
from cooked_court.services.feed import PostStore
from cooked_court.services.judge import JudgeClient, JudgeError
from cooked_court.services.scoring import apply_judgment, apply_judgment_failure

from ..dependencies import (
    CurrentUserDep,
    JudgeClientDep,
    OptionalUserDep,
    PostStoreDep,
    get_post_or_404,
)

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


async def analyze_post(
    store: PostStore,
    judge: JudgeClient,
    post_id: str,
    story: str,
    image_base64: str | None,
) -> None:
    """Fetch the AI judgment for a pending post and merge it in place.

    If the post has left the feed by the time the judgment arrives the
    result is dropped.
    """
    try:
        result = await judge.judge(story, image_base64)
    except JudgeError as exc:
        logger.warning("Failed to judge post %s: %s", post_id, exc)
        result = None
    except Exception:
        # The post must never stay pending, whatever the judge does.
        logger.exception("Unexpected error while judging post %s", post_id)
        result = None

    with store.lock:
        post = store.find(post_id)
        if post is None:
            logger.info("Post %s vanished before its judgment arrived", post_id)
            return
        if result is None:
            apply_judgment_failure(post)
        else:
            apply_judgment(post, result.cooked_score, result.verdict)


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    store: PostStoreDep,
    viewer: OptionalUserDep,
    kind: PostKind | None = Query(None, description="Filter by post kind"),
) -> list[PostResponse]:
    """List the feed: analyzing posts first, then most cooked first."""
    viewer_name = viewer.username if viewer else None
    return [PostResponse.for_viewer(post, viewer_name) for post in store.feed(kind)]


@router.get("/leaderboard", response_model=list[PostResponse])
async def get_leaderboard(
    store: PostStoreDep,
    limit: int = Query(settings.leaderboard_size, ge=1, le=50),
) -> list[PostResponse]:
    """Return the most cooked posts across both kinds."""
    return [PostResponse.for_viewer(post) for post in store.leaderboard(limit)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    store: PostStoreDep,
    viewer: OptionalUserDep,
) -> PostResponse:
    """Get a specific post by ID."""
    post = get_post_or_404(store, post_id)
    return PostResponse.for_viewer(post, viewer.username if viewer else None)


@router.post(
    "/",
    response_model=PostResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    store: PostStoreDep,
    judge: JudgeClientDep,
    background_tasks: BackgroundTasks,
) -> PostResponse:
    """Submit a story for judgment.

    The post joins the feed immediately in the analyzing state; the AI
    judgment is merged in by a background task.
    """
    post = Post(
        kind=post_data.kind,
        author=current_user.username,
        story=post_data.story,
        image_ref=post_data.image_base64,
        is_analyzing=True,
    )
    store.add(post)
    background_tasks.add_task(
        analyze_post,
        store,
        judge,
        post.id,
        post_data.story,
        post_data.image_base64,
    )
    logger.info("Queued judgment for post %s by %s", post.id, current_user.username)
    return PostResponse.for_viewer(post, current_user.username)
