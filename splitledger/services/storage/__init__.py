"""
Storage Services Package

Provides the abstract session storage interface, an in-memory and a JSON
file implementation, and the JSON codec they share.
"""

from splitledger.services.storage.codec import (
    decode_method,
    decode_sessions,
    encode_method,
    encode_sessions,
)
from splitledger.services.storage.interface import (
    CorruptDataError,
    NotFoundError,
    SessionStorageInterface,
    StorageError,
)
from splitledger.services.storage.json_file import JsonFileSessionStorage
from splitledger.services.storage.memory import InMemorySessionStorage

__all__ = [
    # Interface
    "SessionStorageInterface",
    # Exceptions
    "CorruptDataError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemorySessionStorage",
    "JsonFileSessionStorage",
    # Codec
    "decode_method",
    "decode_sessions",
    "encode_method",
    "encode_sessions",
]
