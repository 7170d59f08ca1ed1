"""Pick the storage backend and session store from configuration."""

import logging

from property_office.core.config import Settings
from property_office.core.sessions import MemorySessionStore, SessionStore, SqlSessionStore
from property_office.storage.base import Storage
from property_office.storage.memory import MemStorage
from property_office.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def build_storage(config: Settings) -> tuple[Storage, SessionStore]:
    """SQL storage and sessions when DATABASE_URL is set, otherwise in-memory."""
    if config.DATABASE_URL:
        storage = SqlStorage.from_url(config.DATABASE_URL)
        if config.DATABASE_URL.startswith("sqlite"):
            storage.create_schema()
        logger.info("Using SQL storage")
        return storage, SqlSessionStore(storage.SessionLocal)
    logger.info("Using in-memory storage (data is lost on restart)")
    return MemStorage(), MemorySessionStore()
