"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .judge import router as judge_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "judge_router",
    "posts_router",
    "reactions_router",
    "users_router",
]
