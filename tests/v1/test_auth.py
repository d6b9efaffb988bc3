# tests/v1/test_auth.py
"""Tests for the mocked login flow."""

from fastapi import status
from fastapi.testclient import TestClient

from cooked_court.core.security import decode_access_token
from cooked_court.models import User


def test_login_creates_user_on_first_use(client: TestClient, db_session) -> None:
    response = client.post("/api/v1/auth/login", json={"username": "CryptoChad"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["created"] is True
    assert data["token_type"] == "bearer"
    assert data["user"]["username"] == "CryptoChad"
    assert data["user"]["display_name"] == "CryptoChad"
    assert decode_access_token(data["access_token"]) == "CryptoChad"
    assert db_session.query(User).filter(User.username == "CryptoChad").count() == 1


def test_login_reuses_existing_user(client: TestClient, test_user: User) -> None:
    response = client.post("/api/v1/auth/login", json={"username": test_user.username})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["created"] is False
    assert data["user"]["id"] == test_user.id


def test_login_rejects_invalid_username(client: TestClient) -> None:
    response = client.post("/api/v1/auth/login", json={"username": "x"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.post("/api/v1/auth/login", json={"username": "spaces are bad"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_logout_requires_token(client: TestClient, auth_token: dict[str, str]) -> None:
    assert client.post("/api/v1/auth/logout").status_code == status.HTTP_401_UNAUTHORIZED

    response = client.post("/api/v1/auth/logout", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "logged_out"}


def test_invalid_token_rejected(client: TestClient) -> None:
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"


def test_token_for_unknown_user_rejected(client: TestClient) -> None:
    from cooked_court.core.security import create_access_token

    headers = {"Authorization": f"Bearer {create_access_token('nobody')}"}
    response = client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "User not found"
