"""In-memory post feed.

The store is the single owner of every :class:`Post`. Mutations happen under
``store.lock`` so that concurrent requests never interleave inside one
scoring rule.
"""

from __future__ import annotations

import logging
from threading import RLock

from cooked_court.core.settings import settings
from cooked_court.db.time import now_ms
from cooked_court.models import Comment, CommunityVotes, Post, PostKind, ReactionCounts

logger = logging.getLogger(__name__)

_MINUTE_MS = 60 * 1000
_HOUR_MS = 60 * _MINUTE_MS


class PostNotFoundError(KeyError):
    """Raised when a post id is not in the feed."""


class PostStore:
    """Process-local feed, newest submission first."""

    def __init__(self) -> None:
        self._posts: list[Post] = []
        self.lock = RLock()

    def __len__(self) -> int:
        return len(self._posts)

    def add(self, post: Post) -> Post:
        """Prepend ``post`` to the feed."""
        with self.lock:
            self._posts.insert(0, post)
        return post

    def get(self, post_id: str) -> Post:
        with self.lock:
            for post in self._posts:
                if post.id == post_id:
                    return post
        raise PostNotFoundError(post_id)

    def find(self, post_id: str) -> Post | None:
        try:
            return self.get(post_id)
        except PostNotFoundError:
            return None

    def remove(self, post_id: str) -> None:
        with self.lock:
            self._posts = [post for post in self._posts if post.id != post_id]

    def feed(self, kind: PostKind | None = None) -> list[Post]:
        """Return the feed ordered for display.

        Posts still being analyzed come first so activity is visible, then
        everything else by display score, highest first.
        """
        with self.lock:
            posts = [post for post in self._posts if kind is None or post.kind == kind]
        return sorted(posts, key=lambda post: (not post.is_analyzing, -post.display_score))

    def by_author(self, username: str) -> list[Post]:
        """Return ``username``'s posts, newest first."""
        with self.lock:
            posts = [post for post in self._posts if post.author == username]
        return sorted(posts, key=lambda post: post.timestamp, reverse=True)

    def leaderboard(self, limit: int) -> list[Post]:
        """Return the most cooked resolved posts."""
        with self.lock:
            resolved = [post for post in self._posts if not post.is_analyzing]
        return sorted(resolved, key=lambda post: post.display_score, reverse=True)[:limit]


def demo_posts() -> list[Post]:
    """Posts used to make an empty feed look populated."""
    now = now_ms()
    return [
        Post(
            id="1",
            kind=PostKind.SHAME,
            author="UnluckyDave",
            story=(
                "Dropped my phone in the toilet. While fishing it out, my glasses "
                "fell in too. Flushed out of panic."
            ),
            timestamp=now - 2 * _HOUR_MS,
            ai_score=95,
            display_score=95,
            verdict="Double kill. Flush yourself next time, it's safer.",
            community_votes=CommunityVotes(count=20, total_score=1900),
            reactions=ReactionCounts(laughs=42, respects=12, wins=0, losses=85),
            comments=[
                Comment(
                    id="c1",
                    author="ToiletSurfer",
                    text="Bro needs a leash for his glasses",
                    timestamp=now - 30 * _MINUTE_MS,
                )
            ],
        ),
        Post(
            id="2",
            kind=PostKind.COST,
            author="Sarah_Codes",
            story=(
                "Finally fixed the production bug that was keeping us awake for 48 hours. "
                "I accidentally deleted the entire user table in the process, but the bug IS gone."
            ),
            timestamp=now - 45 * _MINUTE_MS,
            ai_score=100,
            display_score=100,
            verdict="Task failed successfully. You won the battle but nuked the war.",
            community_votes=CommunityVotes(count=50, total_score=5000),
            reactions=ReactionCounts(laughs=128, respects=85, wins=240, losses=0),
        ),
        Post(
            id="3",
            kind=PostKind.SHAME,
            author="InternJim",
            story="Replied \"Love you too\" to my boss's email about the quarterly report.",
            timestamp=now - 10 * _MINUTE_MS,
            ai_score=65,
            display_score=65,
            verdict="HR is already typing the termination letter. Cringe.",
            community_votes=CommunityVotes(count=5, total_score=325),
            reactions=ReactionCounts(laughs=8, respects=2, wins=0, losses=15),
        ),
    ]


def seed_demo_posts(store: PostStore) -> None:
    """Load the demo posts into an empty store."""
    if len(store):
        return
    # Oldest first so that prepending leaves the newest on top.
    for post in sorted(demo_posts(), key=lambda post: post.timestamp):
        store.add(post)
    logger.info("Seeded feed with %d demo posts", len(store))


_STORE: PostStore | None = None


def get_post_store() -> PostStore:
    """Return the process-wide post store, seeding it on first use."""
    global _STORE
    if _STORE is None:
        _STORE = PostStore()
        if settings.seed_demo_posts:
            seed_demo_posts(_STORE)
    return _STORE
