"""In-memory post entities.

Posts, votes, reactions and comments are never written to the database; they
live for the lifetime of the process in :class:`cooked_court.services.feed.PostStore`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from cooked_court.db.time import now_ms


class PostKind(str, Enum):
    """The two post categories."""

    SHAME = "shame"  # pure disaster
    COST = "cost"    # won, but at what cost


@dataclass
class CommunityVotes:
    """Running tally of community cooked-score votes."""

    count: int = 0
    total_score: int = 0


@dataclass
class ReactionCounts:
    """Reaction counters shown under a post."""

    laughs: int = 0
    respects: int = 0
    wins: int = 0
    losses: int = 0


@dataclass(frozen=True)
class Comment:
    """A single comment; comments are append-only."""

    id: str
    author: str
    text: str
    timestamp: int


@dataclass
class Post:
    """One user submission together with its community state."""

    kind: PostKind
    author: str
    story: str
    image_ref: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = field(default_factory=now_ms)

    ai_score: int = 0
    display_score: int = 0
    verdict: str = ""
    is_analyzing: bool = False

    community_votes: CommunityVotes = field(default_factory=CommunityVotes)
    reactions: ReactionCounts = field(default_factory=ReactionCounts)
    comments: list[Comment] = field(default_factory=list)

    # Per-viewer records; a viewer is identified by username.
    voters: set[str] = field(default_factory=set)
    w_marks: set[str] = field(default_factory=set)
    l_marks: set[str] = field(default_factory=set)

    def has_voted(self, viewer: str) -> bool:
        return viewer in self.voters

    def has_marked_w(self, viewer: str) -> bool:
        return viewer in self.w_marks

    def has_marked_l(self, viewer: str) -> bool:
        return viewer in self.l_marks
