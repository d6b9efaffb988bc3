"""Per-user statistics shown on a profile page."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from cooked_court.models import Post

# Average score thresholds for rank titles, checked from the top down.
_RANKS: tuple[tuple[int, str], ...] = (
    (85, "Burnt to a Crisp"),
    (60, "Well Done"),
    (30, "Medium Rare"),
)
_LOWEST_RANK = "Lightly Seared"
_UNRANKED = "Raw (Uncooked)"


@dataclass(frozen=True)
class ScoreDistribution:
    safe: int = 0
    medium: int = 0
    well_done: int = 0
    burnt: int = 0


@dataclass(frozen=True)
class ProfileStats:
    """Aggregate numbers over a user's posts."""

    total_posts: int = 0
    total_respects: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_votes: int = 0
    average_score: int = 0
    distribution: ScoreDistribution = field(default_factory=ScoreDistribution)
    rank_title: str = _UNRANKED


def rank_title(average_score: int, total_posts: int) -> str:
    """Return the cooked rank for an average score."""
    if total_posts == 0:
        return _UNRANKED
    for threshold, title in _RANKS:
        if average_score > threshold:
            return title
    return _LOWEST_RANK


def compute_profile_stats(posts: Sequence[Post]) -> ProfileStats:
    """Summarise ``posts`` (all authored by one user)."""
    total = len(posts)
    if total == 0:
        return ProfileStats()

    scores = [post.display_score for post in posts]
    average = int(sum(scores) / total + 0.5)
    distribution = ScoreDistribution(
        safe=sum(1 for s in scores if s <= 30),
        medium=sum(1 for s in scores if 30 < s <= 60),
        well_done=sum(1 for s in scores if 60 < s <= 85),
        burnt=sum(1 for s in scores if s > 85),
    )
    return ProfileStats(
        total_posts=total,
        total_respects=sum(post.reactions.respects for post in posts),
        total_wins=sum(post.reactions.wins for post in posts),
        total_losses=sum(post.reactions.losses for post in posts),
        total_votes=sum(post.community_votes.count for post in posts),
        average_score=average,
        distribution=distribution,
        rank_title=rank_title(average, total),
    )
