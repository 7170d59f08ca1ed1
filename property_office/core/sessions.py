"""
Server-side login sessions.

The cookie carries a signed, opaque session id; the store maps that id to
the user it was issued for. Nothing here knows about HTTP.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import sessionmaker

from property_office.db.models import AuthSession


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore(ABC):
    """get/set/destroy by opaque session id."""

    @abstractmethod
    def get(self, session_id: str) -> str | None:
        """Return the user id for a live session, None if absent or expired."""

    @abstractmethod
    def set(self, session_id: str, user_id: str, ttl_seconds: int) -> None: ...

    @abstractmethod
    def destroy(self, session_id: str) -> None: ...

    def close(self) -> None:
        return None


@dataclass(frozen=True)
class _Entry:
    user_id: str
    expires_at: datetime


class MemorySessionStore(SessionStore):
    """Process-local session map. Expired entries are pruned on write."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def get(self, session_id: str) -> str | None:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return None
            if entry.expires_at <= _now():
                del self._entries[session_id]
                return None
            return entry.user_id

    def set(self, session_id: str, user_id: str, ttl_seconds: int) -> None:
        now = _now()
        with self._lock:
            self._prune(now)
            self._entries[session_id] = _Entry(user_id, now + timedelta(seconds=ttl_seconds))

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)

    def _prune(self, now: datetime) -> None:
        expired = [sid for sid, entry in self._entries.items() if entry.expires_at <= now]
        for sid in expired:
            del self._entries[sid]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SqlSessionStore(SessionStore):
    """Sessions in the `sessions` table, shared by every worker process."""

    def __init__(self, session_factory: sessionmaker):
        self.SessionLocal = session_factory

    def get(self, session_id: str) -> str | None:
        with self.SessionLocal() as db:
            row = db.get(AuthSession, session_id)
            if row is None:
                return None
            if row.expire <= _now():
                db.delete(row)
                db.commit()
                return None
            return row.user_id

    def set(self, session_id: str, user_id: str, ttl_seconds: int) -> None:
        now = _now()
        with self.SessionLocal() as db:
            db.query(AuthSession).filter(AuthSession.expire <= now).delete(
                synchronize_session=False
            )
            db.merge(
                AuthSession(
                    sid=session_id,
                    user_id=user_id,
                    expire=now + timedelta(seconds=ttl_seconds),
                )
            )
            db.commit()

    def destroy(self, session_id: str) -> None:
        with self.SessionLocal() as db:
            db.query(AuthSession).filter(AuthSession.sid == session_id).delete(
                synchronize_session=False
            )
            db.commit()
