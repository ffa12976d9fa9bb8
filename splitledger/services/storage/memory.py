"""In-memory session storage, used by tests and short-lived sessions."""

from typing import Optional
from uuid import UUID

from splitledger.models.expense import ExpenseSession
from splitledger.services.storage.interface import (
    NotFoundError,
    SessionStorageInterface,
)


class InMemorySessionStorage(SessionStorageInterface):
    """Keeps sessions in a list, newest first."""

    def __init__(self, sessions: Optional[list[ExpenseSession]] = None):
        self._sessions: list[ExpenseSession] = list(sessions or [])

    def add_session(self, session: ExpenseSession) -> None:
        self._sessions.insert(0, session)

    def update_session(self, session: ExpenseSession) -> None:
        for index, stored in enumerate(self._sessions):
            if stored.id == session.id:
                self._sessions[index] = session
                return
        raise NotFoundError(f"Session {session.id} not found")

    def delete_session(self, session_id: UUID) -> bool:
        before = len(self._sessions)
        self._sessions = [s for s in self._sessions if s.id != session_id]
        return len(self._sessions) < before

    def get_session(self, session_id: UUID) -> Optional[ExpenseSession]:
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def list_sessions(self) -> list[ExpenseSession]:
        return list(self._sessions)

    def clear_all(self) -> None:
        self._sessions.clear()
