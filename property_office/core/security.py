"""Security utilities for password hashing and signed session cookies."""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from property_office.core.config import Settings, settings

logger = logging.getLogger(__name__)

INSECURE_FALLBACK_SECRET = "insecure-fallback-change-in-production"

# scrypt parameters (N=2^14, r=8, p=1, 64-byte key)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LEN = 64
SALT_BYTES = 16
HASH_SEPARATOR = "."


# =============================================================================
# Password Hashing (scrypt)
# =============================================================================

def _derive_key(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode(),
        salt=salt.encode(),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=SCRYPT_KEY_LEN,
    )


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh random salt.

    Returns "<hex derived key>.<hex salt>". Two calls with the same
    password never return the same string.
    """
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive_key(password, salt).hex()}{HASH_SEPARATOR}{salt}"


def verify_password(supplied: str, stored: str) -> bool:
    """
    Check a supplied password against a stored "<hash>.<salt>" value.

    Comparison is constant-time. Malformed stored values return False.
    """
    hashed, sep, salt = (stored or "").partition(HASH_SEPARATOR)
    if not sep or not hashed or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    if len(expected) != SCRYPT_KEY_LEN:
        return False
    return hmac.compare_digest(expected, _derive_key(supplied, salt))


# =============================================================================
# Session Secret Policy
# =============================================================================

def check_session_secret(config: Settings = settings) -> str:
    """
    Return the secret used to sign session cookies.

    Fails closed: a missing SESSION_SECRET stops a production process.
    Everywhere else the insecure fallback is used with a loud warning.
    """
    if config.SESSION_SECRET:
        return config.SESSION_SECRET
    if config.is_production:
        raise RuntimeError("SESSION_SECRET is required in production environment")
    logger.warning(
        "SESSION_SECRET not set, using insecure fallback (never do this in production)"
    )
    return INSECURE_FALLBACK_SECRET


def _signing_secrets(config: Settings) -> list[str]:
    return [s or INSECURE_FALLBACK_SECRET for s in config.session_secrets]


# =============================================================================
# Session Token (signed session id in cookie)
# =============================================================================

def generate_session_id() -> str:
    """Generate an opaque, cryptographically random session id."""
    return secrets.token_urlsafe(32)


def create_session_token(session_id: str, config: Settings = settings) -> str:
    """
    Sign a session id for the cookie.

    Always signs with the current secret. The token only carries the
    session id; the principal lives in the server-side session store.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sid": session_id,
        "iat": now,
        "exp": now + timedelta(seconds=config.session_max_age_seconds),
    }
    return jwt.encode(payload, _signing_secrets(config)[0], algorithm="HS256")


def decode_session_token(token: str, config: Settings = settings) -> str:
    """
    Verify a session cookie and return the session id it carries.

    Tries current secret first, then previous (for rotation support).

    Raises:
        jwt.InvalidTokenError: If token invalid with all secrets
    """
    last_error: jwt.InvalidTokenError | None = None
    for secret in _signing_secrets(config):
        try:
            payload = jwt.decode(token, secret, algorithms=["HS256"])
        except jwt.InvalidTokenError as e:
            last_error = e
            continue
        session_id = payload.get("sid")
        if not isinstance(session_id, str) or not session_id:
            raise jwt.InvalidTokenError("Session token carries no session id")
        return session_id
    raise last_error  # type: ignore[misc]
