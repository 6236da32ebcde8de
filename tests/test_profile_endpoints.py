"""Tests for the profile endpoints."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from whereto_auth.domain.schemas.user import IdentityClaim
from whereto_auth.domain.services import create_access_token


async def register_and_login(client: AsyncClient, name: str, email: str) -> dict:
    await client.post("/auth/register", json={"name": name, "email": email, "password": "password123"})
    response = await client.post("/auth/login", json={"email": email, "password": "password123"})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


class TestProfile:
    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient):
        response = await client.get("/profile")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_bad_token(self, client: AsyncClient):
        response = await client.get("/profile", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_rejects_expired_token(self, client: AsyncClient, app):
        claim = IdentityClaim(id=uuid4(), email="x@example.com", name="X")
        token, _ = create_access_token(
            claim, expires_delta=timedelta(seconds=-5), secret_key=app.state.jwt_secret_key
        )
        response = await client.get("/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient):
        headers = await register_and_login(client, "Alice", "alice@example.com")
        response = await client.get("/profile", headers=headers)
        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"
        assert response.json()["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_deleted_user_is_404(self, client: AsyncClient, app):
        claim = IdentityClaim(id=uuid4(), email="ghost@example.com", name="Ghost")
        token, _ = create_access_token(claim, secret_key=app.state.jwt_secret_key)
        response = await client.get("/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_profile(self, client: AsyncClient):
        headers = await register_and_login(client, "Alice", "alice@example.com")
        response = await client.put(
            "/profile", headers=headers, json={"name": "Alice B", "email": "aliceb@example.com"}
        )
        assert response.status_code == 200
        assert response.json()["email"] == "aliceb@example.com"

        login = await client.post(
            "/auth/login", json={"email": "aliceb@example.com", "password": "password123"}
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_update_email_taken(self, client: AsyncClient):
        await register_and_login(client, "Alice", "alice@example.com")
        headers = await register_and_login(client, "Bob", "bob@example.com")
        response = await client.put(
            "/profile", headers=headers, json={"name": "Bob", "email": "alice@example.com"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Email is already taken"

    @pytest.mark.asyncio
    async def test_update_requires_fields(self, client: AsyncClient):
        headers = await register_and_login(client, "Alice", "alice@example.com")
        response = await client.put("/profile", headers=headers, json={"name": "Alice"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Name and email are required"
