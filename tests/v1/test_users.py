# mypy: ignore-errors
# tests/v1/test_users.py
"""Tests for user profile endpoints and token provisioning."""

from fastapi import status

from kgotla.core.security import create_access_token
from kgotla.models import User


def test_get_me(client, auth_token, test_user) -> None:
    response = client.get("/api/v1/users/me", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == test_user.id
    assert response.json()["displayName"] == "Thabo"


def test_first_request_provisions_user(client, db_session) -> None:
    token = create_access_token("user-new", {"email": "new@example.com", "name": "Zanele"})

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["displayName"] == "Zanele"
    user = db_session.get(User, "user-new")
    assert user.email == "new@example.com"


def test_update_me(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/users/me",
        json={"bio": "Community gardener", "location": "Tembisa"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["bio"] == "Community gardener"
    assert response.json()["displayName"] == "Thabo"


def test_get_public_profile(client, test_user) -> None:
    response = client.get(f"/api/v1/users/{test_user.id}")

    assert response.status_code == status.HTTP_200_OK
    assert "email" not in response.json()


def test_get_missing_user(client) -> None:
    assert client.get("/api/v1/users/nobody").status_code == status.HTTP_404_NOT_FOUND


def test_me_requires_auth(client) -> None:
    response = client.get("/api/v1/users/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"
