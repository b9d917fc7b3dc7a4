"""End-to-end tests for registration, login and token handling."""

from __future__ import annotations

import pytest

from tests.e2e.conftest import API, DEFAULT_PASSWORD, bearer, register


pytestmark = pytest.mark.e2e


class TestRegistrationAndLogin:
    """Full account lifecycle through the HTTP API."""

    async def test_register_then_login_by_email(self, client):
        """Should register, log in by email and resolve the caller on /me."""
        registered = await register(client, "chef1")

        assert registered["tokenType"] == "Bearer"
        assert registered["expiresIn"] == 86400
        assert registered["user"]["username"] == "chef1"
        assert registered["user"]["role"] == "USER"
        assert "password" not in str(registered["user"]).lower()

        login = await client.post(
            f"{API}/auth/login",
            json={"usernameOrEmail": "chef1@example.com", "password": DEFAULT_PASSWORD},
        )
        assert login.status_code == 200
        assert login.json()["user"]["lastLogin"] is not None

        me = await client.get(f"{API}/auth/me", headers=bearer(login.json()))
        assert me.status_code == 200
        assert me.json()["email"] == "chef1@example.com"

    async def test_mixed_case_email_login_and_availability(self, client):
        """Should accept the exact registered email for login and report it taken."""
        registered = await register(client, "chef2", email="chef2@EXAMPLE.com")
        assert registered["user"]["email"] == "chef2@EXAMPLE.com"

        login = await client.post(
            f"{API}/auth/login",
            json={"usernameOrEmail": "chef2@EXAMPLE.com", "password": DEFAULT_PASSWORD},
        )
        availability = await client.get(
            f"{API}/auth/check-email", params={"email": "chef2@EXAMPLE.com"}
        )

        assert login.status_code == 200
        assert availability.json()["available"] is False

    async def test_duplicate_username(self, client, alice):
        response = await client.post(
            f"{API}/auth/register",
            json={
                "username": "alice",
                "email": "other@example.com",
                "password": DEFAULT_PASSWORD,
            },
        )

        assert response.status_code == 409
        assert response.json()["details"][0]["field"] == "username"

    async def test_invalid_registration(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"username": "x", "email": "nope", "password": "short"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_wrong_password(self, client, alice):
        """Should answer 401 without saying which part was wrong."""
        response = await client.post(
            f"{API}/auth/login",
            json={"usernameOrEmail": "alice", "password": "WrongPass1"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username/email or password"

    async def test_me_requires_token(self, client):
        response = await client.get(f"{API}/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestTokens:
    async def test_refresh_issues_new_pair(self, client, alice):
        response = await client.post(
            f"{API}/auth/refresh", json={"refreshToken": alice["refreshToken"]}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["user"]["username"] == "alice"

        me = await client.get(f"{API}/auth/me", headers=bearer(body))
        assert me.status_code == 200

    async def test_refresh_rejects_access_token(self, client, alice):
        response = await client.post(
            f"{API}/auth/refresh", json={"refreshToken": alice["accessToken"]}
        )

        assert response.status_code == 401

    async def test_refresh_token_not_accepted_as_bearer(self, client, alice):
        """Should treat a refresh token on a protected route as anonymous."""
        response = await client.get(
            f"{API}/auth/me",
            headers={"Authorization": f"Bearer {alice['refreshToken']}"},
        )

        assert response.status_code == 401

    async def test_validate(self, client, alice):
        response = await client.post(
            f"{API}/auth/validate", json={"token": alice["accessToken"]}
        )

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    async def test_validate_garbage(self, client):
        response = await client.post(f"{API}/auth/validate", json={"token": "garbage"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestChangePassword:
    async def test_change_password(self, client, alice):
        """Should accept only the new password afterwards."""
        response = await client.post(
            f"{API}/auth/change-password",
            headers=bearer(alice),
            json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "NewSecret456"},
        )
        assert response.status_code == 204

        old = await client.post(
            f"{API}/auth/login",
            json={"usernameOrEmail": "alice", "password": DEFAULT_PASSWORD},
        )
        new = await client.post(
            f"{API}/auth/login",
            json={"usernameOrEmail": "alice", "password": "NewSecret456"},
        )
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_wrong_current_password(self, client, alice):
        response = await client.post(
            f"{API}/auth/change-password",
            headers=bearer(alice),
            json={"currentPassword": "Nope12345", "newPassword": "NewSecret456"},
        )

        assert response.status_code == 401


class TestAvailability:
    async def test_check_username(self, client, alice):
        taken = await client.get(f"{API}/auth/check-username", params={"username": "alice"})
        free = await client.get(f"{API}/auth/check-username", params={"username": "carol"})

        assert taken.json() == {"username": "alice", "available": False}
        assert free.json() == {"username": "carol", "available": True}

    async def test_check_email(self, client, alice):
        response = await client.get(
            f"{API}/auth/check-email", params={"email": "alice@example.com"}
        )

        assert response.json()["available"] is False

    async def test_auth_health(self, client):
        response = await client.get(f"{API}/auth/health")

        assert response.json()["service"] == "authentication"
