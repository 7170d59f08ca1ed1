"""Authentication endpoints - register, login, logout, current user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from property_office.core.config import Settings
from property_office.core.deps import (
    get_session_store,
    get_settings,
    get_storage,
    require_authenticated,
)
from property_office.core.rate_limit import AUTH_LIMIT, limiter
from property_office.core.sessions import SessionStore
from property_office.schemas import (
    LoginRequest,
    PublicUser,
    RegisterRequest,
    SuccessResponse,
    User,
    to_public_user,
)
from property_office.services import auth_service
from property_office.services.auth_service import UsernameTakenError
from property_office.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, token: str, config: Settings) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=config.session_max_age_seconds,
        httponly=True,
        samesite="strict",
        secure=config.cookie_secure,
        path="/",
    )


def _start_session(
    request: Request,
    response: Response,
    user: User,
    session_store: SessionStore,
    config: Settings,
) -> None:
    # Drop whatever session the browser came in with before issuing a new id
    auth_service.end_session(
        session_store, request.cookies.get(config.SESSION_COOKIE_NAME), config
    )
    token = auth_service.establish_session(session_store, user, config)
    _set_session_cookie(response, token, config)


# =============================================================================
# Session Endpoints
# =============================================================================

@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_LIMIT)
def register(
    request: Request,
    response: Response,
    data: RegisterRequest,
    storage: Storage = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    config: Settings = Depends(get_settings),
):
    """
    Self-registration. The new account always gets the "user" role and
    is logged in straight away.
    """
    try:
        user = auth_service.register_user(storage, data)
    except UsernameTakenError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _start_session(request, response, user, session_store, config)
    return to_public_user(user)


@router.post("/login", response_model=PublicUser)
@limiter.limit(AUTH_LIMIT)
def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    storage: Storage = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    config: Settings = Depends(get_settings),
):
    user = auth_service.authenticate(storage, data.username, data.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    _start_session(request, response, user, session_store, config)
    logger.info("User %s logged in", user.id)
    return to_public_user(user)


@router.post("/logout", response_model=SuccessResponse)
def logout(
    request: Request,
    response: Response,
    session_store: SessionStore = Depends(get_session_store),
    config: Settings = Depends(get_settings),
):
    """Destroy the server-side session and clear the cookie. Always succeeds."""
    auth_service.end_session(
        session_store, request.cookies.get(config.SESSION_COOKIE_NAME), config
    )
    response.delete_cookie(
        config.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="strict",
        secure=config.cookie_secure,
    )
    return SuccessResponse()


@router.get("/user", response_model=PublicUser)
def get_current_user(user: User = Depends(require_authenticated)):
    return to_public_user(user)
