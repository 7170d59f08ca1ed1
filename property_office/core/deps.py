"""FastAPI dependencies for authentication, authorization, and storage access."""

from fastapi import Depends, HTTPException, Request

from property_office.core.config import Settings
from property_office.core.sessions import SessionStore
from property_office.db.enums import Role
from property_office.schemas import User
from property_office.services.auth_service import restore_session
from property_office.storage import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """Storage backend chosen at startup (see main.create_app)."""
    return request.app.state.storage


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_optional_user(
    request: Request,
    storage: Storage = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    config: Settings = Depends(get_settings),
) -> User | None:
    """
    Resolve the session cookie to a user, or None for anonymous.

    A bad signature, an expired or destroyed session and a deleted user
    all resolve to None; the user record is re-read on every request.
    """
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    return restore_session(storage, session_store, token, config)


def require_authenticated(user: User | None = Depends(get_optional_user)) -> User:
    """
    Raises:
        HTTPException 401: No valid session
    """
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: User = Depends(require_authenticated)) -> User:
    """
    Admin gate for back-office routes.

    Raises:
        HTTPException 401: No valid session
        HTTPException 403: Authenticated but not an admin
    """
    if user.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Forbidden - Admin access required")
    return user
