"""Tests for registration, login and profile endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskboard.core.security import create_access_token
from src.taskboard.models import User
from tests.factories.user import DEFAULT_TEST_PASSWORD
from tests.helpers import auth_headers

pytestmark = pytest.mark.integration


async def register(client: AsyncClient, email: str = "new@example.com", **overrides):
    payload = {"name": "New User", "email": email, "password": DEFAULT_TEST_PASSWORD}
    payload.update(overrides)
    return await client.post("/api/v1/auth/register", json=payload)


class TestRegistration:
    async def test_register_creates_team_member(self, client: AsyncClient) -> None:
        response = await register(client, email="New.User@Example.com")

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new.user@example.com"
        assert data["role"] == "team_member"
        assert "hashed_password" not in data
        assert "password" not in data

    async def test_duplicate_email_conflicts(self, client: AsyncClient) -> None:
        assert (await register(client)).status_code == 201

        response = await register(client, email="NEW@example.com")

        assert response.status_code == 409
        assert "request_id" in response.json()

    async def test_weak_password_rejected(self, client: AsyncClient) -> None:
        response = await register(client, password="password123")

        assert response.status_code == 400

    async def test_role_cannot_be_self_assigned(self, client: AsyncClient) -> None:
        response = await register(client, role="admin")

        assert response.status_code == 201
        assert response.json()["role"] == "team_member"


class TestLogin:
    async def test_login_returns_bearer_token(self, client: AsyncClient, member: User) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": member.email, "password": DEFAULT_TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"

        profile = await client.get(
            "/api/v1/users/profile",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert profile.status_code == 200
        assert profile.json()["id"] == str(member.id)

    async def test_wrong_password(self, client: AsyncClient, member: User) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": member.email, "password": "not-the-password"},
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_unknown_email_is_indistinguishable(self, client: AsyncClient, member: User) -> None:
        wrong_password = await client.post(
            "/api/v1/auth/login",
            json={"email": member.email, "password": "not-the-password"},
        )
        unknown_email = await client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": "not-the-password"},
        )

        assert unknown_email.status_code == wrong_password.status_code == 401
        assert unknown_email.json()["detail"] == wrong_password.json()["detail"]


class TestBearerGate:
    async def test_missing_header(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/users/profile")

        assert response.status_code == 401

    async def test_wrong_scheme(self, client: AsyncClient, member: User) -> None:
        token = create_access_token(member.id, member.role)

        response = await client.get("/api/v1/users/profile", headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401

    async def test_tampered_token(self, client: AsyncClient, member: User) -> None:
        token = create_access_token(member.id, member.role)

        response = await client.get(
            "/api/v1/users/profile", headers={"Authorization": f"Bearer {token[:-4]}abcd"}
        )

        assert response.status_code == 401

    async def test_token_for_deleted_user(
        self, client: AsyncClient, db_session: AsyncSession, member: User
    ) -> None:
        headers = auth_headers(member)
        await db_session.delete(member)
        await db_session.commit()

        response = await client.get("/api/v1/users/profile", headers=headers)

        assert response.status_code == 401


class TestProfile:
    async def test_update_name(self, client: AsyncClient, member: User) -> None:
        response = await client.patch(
            "/api/v1/users/me", json={"name": "Renamed"}, headers=auth_headers(member)
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

    async def test_update_password_then_login(self, client: AsyncClient, member: User) -> None:
        new_password = "purple-elephant-dancing-quietly"

        response = await client.patch(
            "/api/v1/users/me", json={"password": new_password}, headers=auth_headers(member)
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/v1/auth/login", json={"email": member.email, "password": new_password}
        )
        assert login.status_code == 200

    async def test_directory_lists_users(
        self, client: AsyncClient, member: User, manager: User
    ) -> None:
        response = await client.get("/api/v1/users", headers=auth_headers(member))

        assert response.status_code == 200
        names = [u["name"] for u in response.json()]
        assert names == sorted(names)
        assert {"Mia Member", "Pat Manager"} <= set(names)
