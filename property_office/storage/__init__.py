"""Storage backends behind a single persistence contract."""

from property_office.storage.base import (
    ReferenceNotFoundError,
    Storage,
    StorageError,
    UserAlreadyExistsError,
)
from property_office.storage.memory import MemStorage
from property_office.storage.sql import SqlStorage

__all__ = [
    "MemStorage",
    "ReferenceNotFoundError",
    "SqlStorage",
    "Storage",
    "StorageError",
    "UserAlreadyExistsError",
]
