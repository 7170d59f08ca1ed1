"""Rate limiting configuration for the property office API."""

import logging
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from property_office.core.config import settings

logger = logging.getLogger(__name__)

# Redis is only used when REDIS_URL is set (multi-worker deployments).
# Otherwise limits are kept in process memory.
IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)
AUTH_LIMIT = f"{settings.RATE_LIMIT_AUTH}/minute"


def _storage_uri() -> str:
    if IS_TESTING or not settings.REDIS_URL:
        return "memory://"
    try:
        import redis

        # Test connection upfront
        r = redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        r.ping()
        return settings.REDIS_URL
    except Exception as e:
        logger.warning(f"Redis unavailable for rate limiting, using in-memory: {e}")
        return "memory://"


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_storage_uri(),
    default_limits=DEFAULT_LIMITS,
    enabled=not IS_TESTING,
)
