"""Business logic services for the Cooked Court application."""

from .feed import PostNotFoundError, PostStore, get_post_store
from .judge import JudgeClient, JudgeError, get_judge_client

__all__ = [
    "JudgeClient",
    "JudgeError",
    "PostNotFoundError",
    "PostStore",
    "get_judge_client",
    "get_post_store",
]
