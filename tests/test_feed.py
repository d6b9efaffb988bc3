# tests/test_feed.py
"""Tests for the in-memory feed and profile statistics."""

import pytest

from cooked_court.models import Post, PostKind
from cooked_court.services.feed import PostNotFoundError, PostStore, demo_posts, seed_demo_posts
from cooked_court.services.profile_stats import compute_profile_stats, rank_title
from tests.conftest import make_post


def test_add_prepends_newest_first() -> None:
    store = PostStore()
    first = store.add(make_post(story="first"))
    second = store.add(make_post(story="second"))

    # Equal scores keep arrival order.
    assert [p.id for p in store.feed()] == [second.id, first.id]
    assert store.get(first.id) is first


def test_get_unknown_post_raises() -> None:
    store = PostStore()
    with pytest.raises(PostNotFoundError):
        store.get("missing")
    assert store.find("missing") is None


def test_feed_puts_analyzing_first_then_highest_score() -> None:
    store = PostStore()
    low = store.add(make_post(ai_score=20))
    high = store.add(make_post(ai_score=90))
    pending = store.add(Post(kind=PostKind.SHAME, author="x", story="y", is_analyzing=True))
    mid = store.add(make_post(ai_score=55))

    assert [p.id for p in store.feed()] == [pending.id, high.id, mid.id, low.id]


def test_feed_filters_by_kind() -> None:
    store = PostStore()
    shame = store.add(make_post())
    store.add(make_post(kind=PostKind.COST))

    assert [p.id for p in store.feed(PostKind.SHAME)] == [shame.id]


def test_leaderboard_skips_analyzing_posts() -> None:
    store = PostStore()
    store.add(Post(kind=PostKind.SHAME, author="x", story="y", is_analyzing=True))
    top = store.add(make_post(ai_score=99))
    store.add(make_post(ai_score=10))

    board = store.leaderboard(1)

    assert [p.id for p in board] == [top.id]


def test_seed_demo_posts_only_fills_empty_store() -> None:
    store = PostStore()
    seed_demo_posts(store)
    assert len(store) == len(demo_posts()) == 3

    seed_demo_posts(store)
    assert len(store) == 3
    # Newest demo post sits at the top of the raw feed order.
    assert store.by_author("InternJim")[0].id == "3"


def test_demo_posts_respect_display_invariant() -> None:
    for post in demo_posts():
        assert post.is_analyzing is False
        assert post.display_score == post.ai_score


class TestProfileStats:
    def test_empty_profile_is_raw(self) -> None:
        stats = compute_profile_stats([])
        assert stats.total_posts == 0
        assert stats.rank_title == "Raw (Uncooked)"

    def test_aggregates_posts(self) -> None:
        posts = [make_post(ai_score=95), make_post(ai_score=20), make_post(ai_score=70)]
        posts[0].reactions.respects = 3
        posts[1].reactions.losses = 4
        posts[2].community_votes.count = 7

        stats = compute_profile_stats(posts)

        assert stats.total_posts == 3
        assert stats.total_respects == 3
        assert stats.total_losses == 4
        assert stats.total_votes == 7
        assert stats.average_score == 62  # 185 / 3
        assert stats.distribution.safe == 1
        assert stats.distribution.well_done == 1
        assert stats.distribution.burnt == 1
        assert stats.rank_title == "Well Done"

    @pytest.mark.parametrize(
        ("average", "title"),
        [(86, "Burnt to a Crisp"), (61, "Well Done"), (31, "Medium Rare"), (30, "Lightly Seared")],
    )
    def test_rank_title(self, average: int, title: str) -> None:
        assert rank_title(average, total_posts=1) == title
