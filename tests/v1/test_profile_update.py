# tests/v1/test_profile_update.py
"""Tests for profile customisation."""

from fastapi import status
from fastapi.testclient import TestClient

from cooked_court.models import User


class TestProfileUpdate:
    """Test profile update endpoint functionality."""

    def test_get_me(self, client: TestClient, test_user: User, auth_token: dict[str, str]) -> None:
        response = client.get("/api/v1/users/me", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["username"] == test_user.username
        assert data["display_name"] == test_user.username
        assert data["bio"] == ""
        assert data["avatar"] is None

    def test_get_me_unauthorized(self, client: TestClient) -> None:
        response = client.get("/api/v1/users/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_display_name_only(
        self, client: TestClient, test_user: User, auth_token: dict[str, str], db_session
    ) -> None:
        response = client.patch(
            "/api/v1/users/me/profile",
            json={"display_name": "Dave the Unlucky"},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["display_name"] == "Dave the Unlucky"
        assert data["bio"] == ""

        db_session.refresh(test_user)
        assert test_user.profile is not None
        assert test_user.profile.display_name == "Dave the Unlucky"
        assert test_user.username == "UnluckyDave"

    def test_partial_updates_accumulate(
        self, client: TestClient, auth_token: dict[str, str]
    ) -> None:
        client.patch("/api/v1/users/me/profile", json={"bio": "Professionally cooked."}, headers=auth_token)
        response = client.patch(
            "/api/v1/users/me/profile",
            json={"avatar": "data:image/png;base64,QUJD"},
            headers=auth_token,
        )

        data = response.json()
        assert data["bio"] == "Professionally cooked."
        assert data["avatar"] == "data:image/png;base64,QUJD"

    def test_empty_display_name_rejected(self, client: TestClient, auth_token: dict[str, str]) -> None:
        response = client.patch(
            "/api/v1/users/me/profile",
            json={"display_name": ""},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_update_requires_auth(self, client: TestClient) -> None:
        response = client.patch("/api/v1/users/me/profile", json={"bio": "hi"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
