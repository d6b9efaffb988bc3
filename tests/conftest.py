# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO_POSTS", "false")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cooked_court.api.v1.dependencies import get_judge_client_dep, get_post_store_dep
from cooked_court.core.security import create_access_token
from cooked_court.db.session import Base
from cooked_court.db.session import get_db as app_get_session
from cooked_court.main import app as fastapi_app
from cooked_court.models import Post, PostKind, User
from cooked_court.schemas.judge import JudgmentResult
from cooked_court.services.feed import PostStore
from cooked_court.services.judge import JudgeClient

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def post_store() -> PostStore:
    """A fresh, unseeded feed for each test."""
    return PostStore()


@pytest.fixture()
def judge_client() -> Any:
    """A judge double whose ``judge`` coroutine can be reprogrammed per test."""
    client = MagicMock(spec=JudgeClient)
    client.enabled = True
    client.judge = AsyncMock(
        return_value=JudgmentResult(cooked_score=80, verdict="Skill issue, caught in 4k.")
    )
    client.close = AsyncMock()
    return client


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    post_store: PostStore,
    judge_client: Any,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    overrides: dict[Callable[..., Any], Callable[..., Any]] = {
        app_get_session: _get_session_override,
        get_post_store_dep: lambda: post_store,
        get_judge_client_dep: lambda: judge_client,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db_session: Session, username: str) -> User:
    user = User(username=username)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, "UnluckyDave")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "InternJim")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.username)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.username)}"}


def make_post(
    *,
    kind: PostKind = PostKind.SHAME,
    author: str = "UnluckyDave",
    ai_score: int = 95,
    story: str = "Dropped my phone in the toilet, then my glasses.",
) -> Post:
    """Build a resolved post whose display score equals its AI score."""
    return Post(
        kind=kind,
        author=author,
        story=story,
        ai_score=ai_score,
        display_score=ai_score,
        verdict="Double kill.",
    )


@pytest.fixture()
def shame_post(post_store: PostStore) -> Post:
    """A resolved shame post with ``ai_score=95`` in the feed."""
    return post_store.add(make_post())


@pytest.fixture()
def cost_post(post_store: PostStore) -> Post:
    """A resolved cost post with ``ai_score=70`` in the feed."""
    return post_store.add(
        make_post(
            kind=PostKind.COST,
            author="Sarah_Codes",
            ai_score=70,
            story="Fixed the bug, deleted the user table.",
        )
    )
