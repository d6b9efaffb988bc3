"""Post scoring and reaction rules.

All functions here operate on an in-memory :class:`~cooked_court.models.Post`
and never perform I/O. Callers are expected to hold the feed lock while
mutating a post (see :class:`cooked_court.services.feed.PostStore`).

The community score is a damped mean: the AI's original score counts as
``AI_WEIGHT`` implicit extra votes, so it anchors the consensus while its
influence shrinks as more people vote.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from typing import Final

from cooked_court.db.time import now_ms
from cooked_court.models import Comment, Post, PostKind

AI_WEIGHT: Final[int] = 1
MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100

# Viewer used when the caller does not distinguish viewers (single session).
SESSION_VIEWER: Final[str] = "__session__"

FALLBACK_SCORE: Final[int] = 50
FALLBACK_VERDICT: Final[str] = "AI broke, but you're probably cooked."

CRITICAL_THRESHOLD: Final[int] = 85


@dataclass(frozen=True)
class ScoreBand:
    """Display band for a cooked score."""

    label: str
    color: str
    critical: bool


# Upper bound (inclusive) -> (label, color); the last band covers everything above 85.
_BANDS: Final[dict[PostKind, tuple[tuple[int, str, str], ...]]] = {
    PostKind.SHAME: (
        (30, "BARELY SCATHED", "safe"),
        (60, "MEDIUM RARE", "warning"),
        (85, "WELL DONE", "orange"),
        (MAX_SCORE, "CRITICALLY COOKED", "accent"),
    ),
    PostKind.COST: (
        (30, "WORTH IT", "green-300"),
        (60, "CALCULATED RISK", "green-500"),
        (85, "HEAVY TOLL", "emerald-500"),
        (MAX_SCORE, "PYRRHIC VICTORY", "green-500"),
    ),
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, int(value)))


def weighted_score(total_score: int, count: int, ai_score: int) -> int:
    """Return the damped community score for the given tally."""
    return _round_half_up((total_score + ai_score * AI_WEIGHT) / (count + AI_WEIGHT))


def submit_vote(post: Post, raw_value: int, viewer: str = SESSION_VIEWER) -> bool:
    """Fold a viewer's cooked-score vote into the post.

    Returns:
        True if the vote was counted, False if the viewer had already voted.

    Raises:
        ValueError: If ``raw_value`` falls outside ``[0, 100]``.
    """
    if not MIN_SCORE <= raw_value <= MAX_SCORE:
        raise ValueError(f"Vote must be between {MIN_SCORE} and {MAX_SCORE}")
    if post.has_voted(viewer):
        return False

    votes = post.community_votes
    votes.count += 1
    votes.total_score += raw_value
    post.display_score = weighted_score(votes.total_score, votes.count, post.ai_score)
    post.voters.add(viewer)
    return True


def toggle_respect(post: Post) -> int:
    """Press F. Unlimited per viewer."""
    post.reactions.respects += 1
    return post.reactions.respects


def add_laugh(post: Post) -> int:
    post.reactions.laughs += 1
    return post.reactions.laughs


def toggle_w(post: Post, viewer: str = SESSION_VIEWER) -> bool:
    """Flip the viewer's W mark. Returns the new mark state."""
    if post.has_marked_w(viewer):
        post.w_marks.discard(viewer)
        post.reactions.wins = max(0, post.reactions.wins - 1)
        return False
    post.w_marks.add(viewer)
    post.reactions.wins += 1
    return True


def toggle_l(post: Post, viewer: str = SESSION_VIEWER) -> bool:
    """Flip the viewer's L mark. Returns the new mark state."""
    if post.has_marked_l(viewer):
        post.l_marks.discard(viewer)
        post.reactions.losses = max(0, post.reactions.losses - 1)
        return False
    post.l_marks.add(viewer)
    post.reactions.losses += 1
    return True


def add_comment(post: Post, author: str, text: str) -> Comment | None:
    """Append a comment, or return None when ``text`` is blank."""
    if not text.strip():
        return None
    comment = Comment(id=str(uuid.uuid4()), author=author, text=text, timestamp=now_ms())
    post.comments.append(comment)
    return comment


def classify_band(score: int, kind: PostKind = PostKind.SHAME) -> ScoreBand:
    """Map a score onto its display band for the given post kind."""
    value = _clamp_score(score)
    for upper, label, color in _BANDS[kind]:
        if value <= upper:
            return ScoreBand(label=label, color=color, critical=value > CRITICAL_THRESHOLD)
    raise AssertionError("unreachable: last band covers MAX_SCORE")  # pragma: no cover


def apply_judgment(post: Post, cooked_score: int, verdict: str) -> bool:
    """Resolve an analyzing post with the AI's score and verdict.

    The AI score is set once; a post that is no longer analyzing is left
    untouched and False is returned.
    """
    if not post.is_analyzing:
        return False
    score = _clamp_score(cooked_score)
    post.ai_score = score
    post.display_score = score
    post.verdict = verdict
    post.is_analyzing = False
    return True


def apply_judgment_failure(post: Post) -> bool:
    """Resolve an analyzing post with the fixed fallback judgment."""
    return apply_judgment(post, FALLBACK_SCORE, FALLBACK_VERDICT)
