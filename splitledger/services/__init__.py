"""Services package."""

from splitledger.services.storage import (
    CorruptDataError,
    InMemorySessionStorage,
    JsonFileSessionStorage,
    NotFoundError,
    SessionStorageInterface,
    StorageError,
)

__all__ = [
    "CorruptDataError",
    "InMemorySessionStorage",
    "JsonFileSessionStorage",
    "NotFoundError",
    "SessionStorageInterface",
    "StorageError",
]
