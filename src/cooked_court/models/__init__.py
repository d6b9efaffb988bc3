"""Models for the Cooked Court application."""

from .post import Comment, CommunityVotes, Post, PostKind, ReactionCounts
from .user import User, UserProfile

__all__ = [
    "Comment", "CommunityVotes", "Post", "PostKind", "ReactionCounts",
    "User", "UserProfile",
]
