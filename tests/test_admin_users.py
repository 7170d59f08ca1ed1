"""Tests for admin user management."""
import pytest
from httpx import AsyncClient

from property_office.core.security import verify_password


@pytest.mark.asyncio
async def test_list_users_hides_passwords(admin_client: AsyncClient, regular_user):
    response = await admin_client.get("/api/admin/users")
    assert response.status_code == 200
    users = response.json()
    assert {u["username"] for u in users} == {"admin", "resident"}
    assert all("password" not in u for u in users)


@pytest.mark.asyncio
async def test_admin_creates_user_with_role(admin_client: AsyncClient, storage):
    response = await admin_client.post(
        "/api/admin/users",
        json={
            "username": "manager2",
            "password": "secret1",
            "role": "admin",
            "firstName": "Zeynep",
            "email": "zeynep@example.com",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "admin"
    assert data["firstName"] == "Zeynep"
    assert "password" not in data

    stored = storage.get_user(data["id"])
    assert verify_password("secret1", stored.password)


@pytest.mark.asyncio
async def test_admin_create_duplicate_username(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/admin/users", json={"username": "admin", "password": "secret1"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"


@pytest.mark.asyncio
async def test_admin_create_invalid_role(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/admin/users",
        json={"username": "someone", "password": "secret1", "role": "superuser"},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "role"


@pytest.mark.asyncio
async def test_reset_password(admin_client: AsyncClient, regular_user, storage):
    response = await admin_client.put(
        f"/api/admin/users/{regular_user.id}/password", json={"password": "brand-new"}
    )
    assert response.status_code == 200
    assert "password" not in response.json()
    assert verify_password("brand-new", storage.get_user(regular_user.id).password)


@pytest.mark.asyncio
async def test_reset_password_unknown_user(admin_client: AsyncClient, storage):
    response = await admin_client.put(
        "/api/admin/users/missing/password", json={"password": "brand-new"}
    )
    assert response.status_code == 404
    assert storage.get_user("missing") is None


@pytest.mark.asyncio
async def test_reset_password_too_short(admin_client: AsyncClient, regular_user):
    response = await admin_client.put(
        f"/api/admin/users/{regular_user.id}/password", json={"password": "123"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(admin_client: AsyncClient, admin_auth, storage):
    response = await admin_client.delete(f"/api/admin/users/{admin_auth.user.id}")
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete your own account"
    assert storage.get_user(admin_auth.user.id) is not None


@pytest.mark.asyncio
async def test_admin_deletes_other_user(admin_client: AsyncClient, regular_user, storage):
    response = await admin_client.delete(f"/api/admin/users/{regular_user.id}")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert storage.get_user(regular_user.id) is None

    response = await admin_client.delete(f"/api/admin/users/{regular_user.id}")
    assert response.status_code == 404
