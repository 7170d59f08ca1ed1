"""Admin-only routes reject anonymous (401) and non-admin (403) callers."""
import pytest
from httpx import AsyncClient

ADMIN_ONLY = [
    ("POST", "/api/buildings"),
    ("PUT", "/api/buildings/some-id"),
    ("DELETE", "/api/buildings/some-id"),
    ("POST", "/api/flats"),
    ("PUT", "/api/flats/some-id"),
    ("DELETE", "/api/flats/some-id"),
    ("POST", "/api/residents"),
    ("PUT", "/api/residents/some-id"),
    ("DELETE", "/api/residents/some-id"),
    ("POST", "/api/fee-payments"),
    ("PUT", "/api/fee-payments/some-id"),
    ("POST", "/api/maintenance-requests"),
    ("PUT", "/api/maintenance-requests/some-id"),
    ("POST", "/api/blog-posts"),
    ("PUT", "/api/blog-posts/some-id"),
    ("DELETE", "/api/blog-posts/some-id"),
    ("GET", "/api/contact"),
    ("PUT", "/api/contact/some-id"),
    ("GET", "/api/admin/users"),
    ("POST", "/api/admin/users"),
    ("PUT", "/api/admin/users/some-id/password"),
    ("DELETE", "/api/admin/users/some-id"),
    ("GET", "/api/dashboard/stats"),
]

PUBLIC_READS = [
    "/api/buildings",
    "/api/flats",
    "/api/residents",
    "/api/fee-payments",
    "/api/maintenance-requests",
    "/api/blog-posts",
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", ADMIN_ONLY)
async def test_anonymous_gets_401(client: AsyncClient, method, path):
    response = await client.request(method, path, json={})
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", ADMIN_ONLY)
async def test_non_admin_gets_403(user_client: AsyncClient, method, path):
    response = await user_client.request(method, path, json={})
    assert response.status_code == 403
    assert response.json() == {"detail": "Forbidden - Admin access required"}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", PUBLIC_READS)
async def test_public_reads_need_no_session(client: AsyncClient, path):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_rejected_write_leaves_storage_untouched(user_client: AsyncClient, storage):
    response = await user_client.post(
        "/api/buildings",
        json={"name": "X", "address": "Y", "totalFlats": 1, "monthlyFee": "10.00"},
    )
    assert response.status_code == 403
    assert storage.list_buildings() == []
