"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from property_office.core.config import Settings, settings
from property_office.core.rate_limit import limiter
from property_office.core.security import check_session_secret
from property_office.core.sessions import MemorySessionStore, SessionStore
from property_office.core.structured_logging import build_log_context
from property_office.routers import (
    admin_users_router,
    auth_router,
    blog_posts_router,
    buildings_router,
    contact_router,
    dashboard_router,
    fee_payments_router,
    flats_router,
    maintenance_requests_router,
    residents_router,
)
from property_office.services import seed_demo_data
from property_office.storage import ReferenceNotFoundError, Storage
from property_office.storage.factory import build_storage

logger = logging.getLogger(__name__)


# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

def _init_sentry(config: Settings) -> None:
    if not config.SENTRY_DSN or config.ENV == "dev":
        return
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=config.SENTRY_DSN,
        environment=config.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,  # 10% of requests for performance monitoring
        send_default_pii=False,  # Don't send PII to Sentry
    )
    logger.info("Sentry initialized for error tracking")


# ============================================================================
# Error Responses
# ============================================================================

def _error_field(loc: tuple) -> str:
    # ("body", "monthlyFee") -> "monthlyFee"; ("query", "flatId") -> "flatId"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _error_message(msg: str) -> str:
    return msg.removeprefix("Value error, ")


def validation_failed(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed", "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return validation_failed(
        [
            {
                "field": _error_field(tuple(err.get("loc", ()))),
                "message": _error_message(err.get("msg", "")),
            }
            for err in exc.errors()
        ]
    )


async def reference_not_found_handler(request: Request, exc: ReferenceNotFoundError):
    return validation_failed(
        [{"field": exc.field, "message": f"No record with id '{exc.value}'"}]
    )


# ============================================================================
# FastAPI App
# ============================================================================

def create_app(
    storage: Storage | None = None,
    session_store: SessionStore | None = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the application.

    Tests pass their own storage and session store; otherwise both are
    chosen from DATABASE_URL. Raises RuntimeError in production when
    SESSION_SECRET is missing.
    """
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    check_session_secret(config)
    _init_sentry(config)

    if storage is None:
        storage, built_session_store = build_storage(config)
        session_store = session_store or built_session_store
        if config.SEED_DEMO_DATA and not config.is_production:
            seed_demo_data(storage, config.SEED_ADMIN_PASSWORD)
    elif session_store is None:
        session_store = MemorySessionStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.session_store.close()
        app.state.storage.close()

    app = FastAPI(
        title="Property Office API",
        description="Building management back office and public site API",
        version=config.VERSION,
        docs_url="/docs" if config.ENV == "dev" else None,
        redoc_url="/redoc" if config.ENV == "dev" else None,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.storage = storage
    app.state.session_store = session_store

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ReferenceNotFoundError, reference_not_found_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log API calls and turn unhandled errors into a generic 500."""
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s",
                request.method,
                request.url.path,
                extra=build_log_context(route=request.url.path, method=request.method),
            )
            response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
        if request.url.path.startswith("/api"):
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                "%s %s %s in %d ms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra=build_log_context(
                    route=request.url.path,
                    method=request.method,
                    status=response.status_code,
                    duration_ms=duration_ms,
                ),
            )
        return response

    # CORS middleware - added last so it wraps error responses too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,  # Required for cookies
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # ========================================================================
    # Routers
    # ========================================================================

    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(buildings_router, prefix="/api/buildings", tags=["buildings"])
    app.include_router(flats_router, prefix="/api/flats", tags=["flats"])
    app.include_router(residents_router, prefix="/api/residents", tags=["residents"])
    app.include_router(fee_payments_router, prefix="/api/fee-payments", tags=["fee-payments"])
    app.include_router(
        maintenance_requests_router,
        prefix="/api/maintenance-requests",
        tags=["maintenance"],
    )
    app.include_router(blog_posts_router, prefix="/api/blog-posts", tags=["blog"])
    app.include_router(contact_router, prefix="/api/contact", tags=["contact"])
    app.include_router(admin_users_router, prefix="/api/admin/users", tags=["admin"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])

    # ========================================================================
    # Health Check
    # ========================================================================

    @app.get("/health")
    def health():
        """
        Health check endpoint.

        Verifies storage connectivity and returns environment info.
        """
        app.state.storage.ping()
        return {"status": "ok", "env": config.ENV, "version": config.VERSION}

    return app


app = create_app()
