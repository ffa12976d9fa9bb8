"""
JSON File Storage Implementation

All sessions live in a single JSON document (see codec.py for the format).
The whole document is rewritten on every change, which is fine for the
handful of sessions a person keeps.

TRADEOFFS:
- No partial writes: the document is written to a temp file and moved
  into place, so a crash leaves either the old or the new version
- Transient OS errors (locked file, full disk that frees up) are retried
- A corrupt document is reported, never silently replaced by an empty one
"""

import os
from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from splitledger.models.expense import ExpenseSession
from splitledger.observability import get_logger
from splitledger.services.storage.codec import decode_sessions, encode_sessions
from splitledger.services.storage.interface import (
    CorruptDataError,
    NotFoundError,
    SessionStorageInterface,
    StorageError,
)

logger = get_logger(__name__)


class JsonFileSessionStorage(SessionStorageInterface):
    """
    Session storage backed by one JSON file.

    Args:
        path: Location of the JSON document (created on first write)
        write_attempts: How many times a failed write is attempted
    """

    def __init__(self, path: Union[str, Path], write_attempts: int = 3):
        self._path = Path(path)
        self._sessions: Optional[list[ExpenseSession]] = None
        self._retrying = Retrying(
            stop=stop_after_attempt(write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[ExpenseSession]:
        """Read the document once; a missing file means no sessions yet."""
        if self._sessions is None:
            text = self._read_file()
            self._sessions = decode_sessions(text) if text.strip() else []
            logger.info(
                "sessions_loaded",
                path=str(self._path),
                count=len(self._sessions),
            )
        return self._sessions

    def _read_file(self) -> str:
        if not self._path.exists():
            return ""
        try:
            return self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"{self._path} is not valid UTF-8 text") from e
        except OSError as e:
            logger.error("sessions_load_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Failed to read sessions from {self._path}: {e}") from e

    def _write_file(self, text: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self._path)

    def _save(self, sessions: list[ExpenseSession]) -> None:
        """Write `sessions` and make them the cached state only once on disk."""
        try:
            self._retrying(self._write_file, encode_sessions(sessions))
        except OSError as e:
            logger.error("sessions_save_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Failed to write sessions to {self._path}: {e}") from e
        self._sessions = sessions
        logger.debug("sessions_saved", path=str(self._path), count=len(sessions))

    def add_session(self, session: ExpenseSession) -> None:
        self._save([session] + self._load())

    def update_session(self, session: ExpenseSession) -> None:
        sessions = self._load()
        for index, stored in enumerate(sessions):
            if stored.id == session.id:
                self._save(sessions[:index] + [session] + sessions[index + 1:])
                return
        raise NotFoundError(f"Session {session.id} not found")

    def delete_session(self, session_id: UUID) -> bool:
        sessions = self._load()
        remaining = [s for s in sessions if s.id != session_id]
        if len(remaining) == len(sessions):
            return False
        self._save(remaining)
        return True

    def get_session(self, session_id: UUID) -> Optional[ExpenseSession]:
        for session in self._load():
            if session.id == session_id:
                return session
        return None

    def list_sessions(self) -> list[ExpenseSession]:
        return list(self._load())

    def clear_all(self) -> None:
        self._save([])
