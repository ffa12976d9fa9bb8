"""
Persisted representation of sessions.

Sessions are stored as a JSON array. The allocation method of each item is
a tagged object so that reloaded sessions resolve identically:

    {"type": "equal"}
    {"type": "weights", "map": {"<participant-uuid>": "2", ...}}
    {"type": "exact",   "map": {"<participant-uuid>": "12.50", ...}}

Decimals are written as strings, so amounts and weights round-trip
exactly. Map entries keep their insertion order.
"""

from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from splitledger.models.expense import ExpenseSession, SplitMethod
from splitledger.services.storage.interface import CorruptDataError

_SESSIONS = TypeAdapter(list[ExpenseSession])
_METHOD = TypeAdapter(SplitMethod)


def encode_sessions(sessions: Iterable[ExpenseSession]) -> str:
    """Serialize sessions to a JSON document."""
    return _SESSIONS.dump_json(list(sessions), indent=2).decode("utf-8")


def decode_sessions(text: str) -> list[ExpenseSession]:
    """
    Parse a JSON document written by encode_sessions().

    Raises:
        CorruptDataError: The document is not valid JSON or does not
            match the session schema
    """
    try:
        return _SESSIONS.validate_json(text)
    except ValidationError as e:
        raise CorruptDataError(
            f"Stored sessions could not be decoded ({e.error_count()} errors)"
        ) from e


def encode_method(method: SplitMethod) -> dict:
    """Tagged JSON-compatible dict for one allocation method."""
    return _METHOD.dump_python(method, mode="json")


def decode_method(data: dict) -> SplitMethod:
    """
    Inverse of encode_method().

    Raises:
        CorruptDataError: Unknown "type" tag or malformed map
    """
    try:
        return _METHOD.validate_python(data)
    except ValidationError as e:
        raise CorruptDataError(f"Invalid allocation method: {data!r}") from e
