"""Authentication service - credentials, registration, session issue/restore."""

import logging

import jwt

from property_office.core.config import Settings, settings
from property_office.core.security import (
    create_session_token,
    decode_session_token,
    generate_session_id,
    hash_password,
    verify_password,
)
from property_office.core.sessions import SessionStore
from property_office.db.enums import Role
from property_office.schemas import (
    AdminUserCreate,
    RegisterRequest,
    User,
    UserCreate,
    UserUpsert,
)
from property_office.storage import Storage, UserAlreadyExistsError

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base exception for auth service errors."""

    pass


class UsernameTakenError(AuthServiceError):
    """Username already registered."""

    pass


def authenticate(storage: Storage, username: str, password: str) -> User | None:
    """
    Check a username/password pair.

    Unknown user, user without a local password and wrong password all
    return None so callers cannot tell them apart.
    """
    user = storage.get_user_by_username(username)
    if user is None or not user.password:
        return None
    if not verify_password(password, user.password):
        return None
    return user


def register_user(storage: Storage, data: RegisterRequest) -> User:
    """
    Create a self-registered account.

    Role is always USER; admin accounts are only created server-side
    or by another admin.
    """
    if storage.get_user_by_username(data.username) is not None:
        raise UsernameTakenError("Username already exists")
    try:
        user = storage.create_user(
            UserCreate(
                username=data.username,
                password=hash_password(data.password),
                role=Role.USER,
            )
        )
    except UserAlreadyExistsError as e:
        raise UsernameTakenError("Username already exists") from e
    logger.info("Registered user %s", user.id)
    return user


def create_user_account(storage: Storage, data: AdminUserCreate) -> User:
    """Admin-created account; the caller chooses the role."""
    if storage.get_user_by_username(data.username) is not None:
        raise UsernameTakenError("Username already exists")
    return storage.create_user(
        UserCreate(
            username=data.username,
            password=hash_password(data.password),
            role=data.role,
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
        )
    )


def set_password(storage: Storage, user_id: str, password: str) -> User | None:
    """Replace a user's password. Returns None if the user does not exist."""
    if storage.get_user(user_id) is None:
        return None
    return storage.upsert_user(UserUpsert(id=user_id, password=hash_password(password)))


# =============================================================================
# Sessions
# =============================================================================

def establish_session(
    session_store: SessionStore, user: User, config: Settings = settings
) -> str:
    """
    Start a server-side session for user.

    Only the user id is stored; returns the signed cookie value.
    """
    session_id = generate_session_id()
    session_store.set(session_id, user.id, config.session_max_age_seconds)
    return create_session_token(session_id, config)


def restore_session(
    storage: Storage,
    session_store: SessionStore,
    token: str | None,
    config: Settings = settings,
) -> User | None:
    """
    Resolve a session cookie to the live user record.

    The user is re-read on every request, so role changes apply without
    a new login. Any failure means anonymous.
    """
    if not token:
        return None
    try:
        session_id = decode_session_token(token, config)
    except jwt.InvalidTokenError:
        return None
    user_id = session_store.get(session_id)
    if user_id is None:
        return None
    return storage.get_user(user_id)


def end_session(
    session_store: SessionStore, token: str | None, config: Settings = settings
) -> None:
    """Destroy the server-side session behind a cookie, if any."""
    if not token:
        return
    try:
        session_id = decode_session_token(token, config)
    except jwt.InvalidTokenError:
        return
    session_store.destroy(session_id)
