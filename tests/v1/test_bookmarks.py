# mypy: ignore-errors
# tests/v1/test_bookmarks.py
"""Tests for bookmark endpoints."""

from fastapi import status
from sqlalchemy import func, insert, select

from kgotla.api.v1.endpoints import bookmarks
from kgotla.models import Bookmark


def test_bookmark_round_trip(client, auth_token, test_post) -> None:
    created = client.post("/api/v1/bookmarks", json={"postId": test_post.id}, headers=auth_token)

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["postId"] == test_post.id

    listed = client.get("/api/v1/bookmarks", headers=auth_token)
    assert [post["id"] for post in listed.json()] == [test_post.id]

    removed = client.delete(f"/api/v1/bookmarks/{test_post.id}", headers=auth_token)
    assert removed.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/bookmarks", headers=auth_token).json() == []


def test_duplicate_bookmark_conflicts(client, auth_token, test_post) -> None:
    client.post("/api/v1/bookmarks", json={"postId": test_post.id}, headers=auth_token)

    response = client.post("/api/v1/bookmarks", json={"postId": test_post.id}, headers=auth_token)

    assert response.status_code == status.HTTP_409_CONFLICT


def test_bookmark_missing_post(client, auth_token) -> None:
    response = client.post("/api/v1/bookmarks", json={"postId": 99999}, headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_remove_missing_bookmark(client, auth_token, test_post) -> None:
    response = client.delete(f"/api/v1/bookmarks/{test_post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_bookmarks_are_private(client, auth_token, other_auth_token, test_post) -> None:
    client.post("/api/v1/bookmarks", json={"postId": test_post.id}, headers=auth_token)

    assert client.get("/api/v1/bookmarks", headers=other_auth_token).json() == []


def test_bookmarks_require_auth(client) -> None:
    assert client.get("/api/v1/bookmarks").status_code == status.HTTP_401_UNAUTHORIZED


def test_concurrent_bookmark_reports_conflict(
    client, auth_token, test_user, test_post, db_session, monkeypatch
) -> None:
    # Another request saved the post after this one checked for it.
    db_session.execute(insert(Bookmark).values(user_id=test_user.id, post_id=test_post.id))
    monkeypatch.setattr(bookmarks, "_find_bookmark", lambda db, user_id, post_id: None)

    response = client.post("/api/v1/bookmarks", json={"postId": test_post.id}, headers=auth_token)

    assert response.status_code == status.HTTP_409_CONFLICT
    count = db_session.scalar(select(func.count()).select_from(Bookmark))
    assert count == 1
