# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from kgotla.core.security import create_access_token  # noqa: E402
from kgotla.db.session import Base  # noqa: E402
from kgotla.db.session import get_db as app_get_session  # noqa: E402
from kgotla.main import app as fastapi_app  # noqa: E402
from kgotla.models import Comment, Group, Post, User  # noqa: E402

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
    connection = engine.connect()
    transaction = connection.begin()
    # Commits and rollbacks inside the app only release savepoints; the
    # outer transaction is rolled back when the test ends.
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db_session: Session, user_id: str, display_name: str) -> User:
    user = User(id=user_id, email=f"{user_id}@example.com", display_name=display_name)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield _make_user(db_session, "user-thabo", "Thabo")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield _make_user(db_session, "user-naledi", "Naledi")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_group(db_session: Session, test_user: User) -> Iterator[Group]:
    """Create a default test group."""
    group = Group(
        name="Soweto Neighbours",
        description="Local news and help",
        category="location",
        location="Soweto",
        creator_id=test_user.id,
        member_count=0,
    )
    db_session.add(group)
    db_session.flush()
    db_session.refresh(group)
    yield group


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Iterator[Post]:
    """Create a baseline post authored by the primary user."""
    post = Post(
        author_id=test_user.id,
        type="text",
        title="Water outage",
        content="Is anyone else without water this morning?",
    )
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post


@pytest.fixture()
def test_comment(db_session: Session, test_post: Post, other_user: User) -> Iterator[Comment]:
    """Create a top-level comment on the baseline post by the secondary user."""
    comment = Comment(
        post_id=test_post.id,
        author_id=other_user.id,
        content="Yes, since 6am on our street.",
    )
    db_session.add(comment)
    db_session.flush()
    db_session.refresh(comment)
    yield comment
