"""
Test configuration and fixtures.

Provides:
- Fresh in-memory storage and session store per test
- SQLite in-memory SqlStorage for backend tests
- Session cookie minting for admin and regular users
- HTTPX AsyncClient bound to an app built around those fixtures
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator

# Configure before anything reads Settings
os.environ["TESTING"] = "1"
os.environ["ENV"] = "test"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["DATABASE_URL"] = ""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from property_office.core.config import settings
from property_office.core.security import hash_password
from property_office.core.sessions import MemorySessionStore
from property_office.db.enums import Role
from property_office.main import create_app
from property_office.schemas import User, UserCreate
from property_office.services.auth_service import establish_session
from property_office.storage import MemStorage, SqlStorage

ADMIN_PASSWORD = "admin-password"
USER_PASSWORD = "user-password"


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def storage() -> MemStorage:
    return MemStorage()


@pytest.fixture(scope="function")
def sql_storage():
    """SqlStorage on a private in-memory SQLite database."""
    backend = SqlStorage.from_url("sqlite://")
    backend.create_schema()
    yield backend
    backend.close()


@pytest.fixture(scope="function")
def session_store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture(scope="function")
def admin_user(storage: MemStorage) -> User:
    return storage.create_user(
        UserCreate(
            username="admin",
            password=hash_password(ADMIN_PASSWORD),
            role=Role.ADMIN,
        )
    )


@pytest.fixture(scope="function")
def regular_user(storage: MemStorage) -> User:
    return storage.create_user(
        UserCreate(username="resident", password=hash_password(USER_PASSWORD))
    )


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = settings.SESSION_COOKIE_NAME


@pytest.fixture(scope="function")
def admin_auth(admin_user: User, session_store: MemorySessionStore) -> TestAuth:
    return TestAuth(user=admin_user, token=establish_session(session_store, admin_user))


@pytest.fixture(scope="function")
def user_auth(regular_user: User, session_store: MemorySessionStore) -> TestAuth:
    return TestAuth(user=regular_user, token=establish_session(session_store, regular_user))


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def app(storage: MemStorage, session_store: MemorySessionStore) -> FastAPI:
    return create_app(storage=storage, session_store=session_store)


@pytest.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture(scope="function")
async def admin_client(app: FastAPI, admin_auth: TestAuth) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient carrying an admin session cookie."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={admin_auth.cookie_name: admin_auth.token},
    ) as c:
        yield c


@pytest.fixture(scope="function")
async def user_client(app: FastAPI, user_auth: TestAuth) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient carrying a non-admin session cookie."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={user_auth.cookie_name: user_auth.token},
    ) as c:
        yield c
