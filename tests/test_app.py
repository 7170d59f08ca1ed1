"""Tests for application assembly: health, secrets, storage selection."""
import pytest
from httpx import ASGITransport, AsyncClient

from property_office.core.config import Settings
from property_office.core.sessions import SqlSessionStore
from property_office.main import create_app
from property_office.storage import MemStorage, SqlStorage


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_production_without_secret_refuses_to_start():
    config = Settings(ENV="production", SESSION_SECRET="")
    with pytest.raises(RuntimeError):
        create_app(storage=MemStorage(), config=config)


def test_default_storage_is_memory_and_seeded():
    config = Settings(ENV="dev", DATABASE_URL="", SEED_DEMO_DATA=True, SEED_ADMIN_PASSWORD="pw1234")
    app = create_app(config=config)
    assert isinstance(app.state.storage, MemStorage)
    assert app.state.storage.get_user_by_username("admin") is not None


def test_database_url_selects_sql_storage(tmp_path):
    config = Settings(
        ENV="dev",
        DATABASE_URL=f"sqlite:///{tmp_path / 'office.db'}",
        SEED_DEMO_DATA=False,
    )
    app = create_app(config=config)
    try:
        assert isinstance(app.state.storage, SqlStorage)
        assert isinstance(app.state.session_store, SqlSessionStore)
        assert app.state.storage.list_buildings() == []
    finally:
        app.state.storage.close()


@pytest.mark.asyncio
async def test_unhandled_error_returns_generic_500(storage, session_store, monkeypatch, caplog):
    app = create_app(storage=storage, session_store=session_store)

    def explode():
        raise RuntimeError("secret internals")

    monkeypatch.setattr(storage, "list_buildings", explode)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        response = await c.get("/api/buildings")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "secret internals" not in response.text
    assert "secret internals" in caplog.text


@pytest.mark.asyncio
async def test_sql_backed_app_login_flow(sql_storage):
    from property_office.core.security import hash_password
    from property_office.db.enums import Role
    from property_office.schemas import UserCreate

    sql_storage.create_user(
        UserCreate(username="admin", password=hash_password("secret1"), role=Role.ADMIN)
    )
    app = create_app(storage=sql_storage, session_store=SqlSessionStore(sql_storage.SessionLocal))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        response = await c.post("/api/login", json={"username": "admin", "password": "secret1"})
        assert response.status_code == 200

        response = await c.post(
            "/api/buildings",
            json={"name": "A", "address": "B", "totalFlats": 1, "monthlyFee": "99.90"},
        )
        assert response.status_code == 201
        assert response.json()["monthlyFee"] == "99.90"
