"""
Abstract Storage Interface

DESIGN DECISION: Session persistence sits behind an abstract interface.
This allows us to:
1. Keep the settlement engine unaware of where sessions live
2. Use in-memory storage for tests
3. Swap the JSON file for a database later without touching business logic

Storage is single-writer: implementations are not thread-safe and the
caller must serialise writes.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from splitledger.models.expense import ExpenseSession


class SessionStorageInterface(ABC):
    """
    Abstract interface for session storage operations.

    Sessions are kept newest first.
    """

    @abstractmethod
    def add_session(self, session: ExpenseSession) -> None:
        """
        Save a new session as the newest entry.

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def update_session(self, session: ExpenseSession) -> None:
        """
        Replace the stored session with the same ID.

        Raises:
            NotFoundError: If no session has that ID
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def delete_session(self, session_id: UUID) -> bool:
        """
        Delete a session by ID.

        Returns:
            True if a session was removed
        """
        pass

    @abstractmethod
    def get_session(self, session_id: UUID) -> Optional[ExpenseSession]:
        """Return the session if found, None otherwise."""
        pass

    @abstractmethod
    def list_sessions(self) -> list[ExpenseSession]:
        """All sessions, newest first."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every stored session."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class CorruptDataError(StorageError):
    """Stored data could not be decoded."""
    pass
