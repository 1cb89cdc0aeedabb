"""
In-memory preferred sessions, keyed by conversation id (chat) or MCP session id.

Each key maps to an immutable frozenset that is swapped under the lock, so readers
always see a consistent snapshot.
"""

import logging
import threading
from collections.abc import Callable

from conference_assistant.core.errors import SessionNotFoundError
from conference_assistant.ingest.loader import load_catalogue
from conference_assistant.schemas.conference import ConferenceSession

logger = logging.getLogger(__name__)

_preferences: dict[str, frozenset[ConferenceSession]] = {}
_lock = threading.Lock()


def find_by_session_title(session_title: str) -> ConferenceSession | None:
    """First catalogue session whose title starts with session_title (case-insensitive)."""
    prefix = (session_title or "").lower()
    return next((s for s in load_catalogue() if s.title.lower().startswith(prefix)), None)


def _require_session(session_title: str) -> ConferenceSession:
    session = find_by_session_title(session_title)
    if session is None:
        raise SessionNotFoundError(session_title)
    return session


def _update_preferences(
    key: str,
    transform: Callable[[frozenset[ConferenceSession]], frozenset[ConferenceSession]],
) -> None:
    with _lock:
        _preferences[key] = transform(_preferences.get(key, frozenset()))


def get_preferred_sessions(key: str) -> set[ConferenceSession]:
    with _lock:
        return set(_preferences.get(key, frozenset()))


def add_preferred_session(key: str, session_title: str) -> ConferenceSession:
    session = _require_session(session_title)
    _update_preferences(key, lambda current: current | {session})
    logger.info("[preference_store:add] key=%s title=%r", key[:16], session.title)
    return session


def remove_preferred_session(key: str, session_title: str) -> ConferenceSession:
    session = _require_session(session_title)
    _update_preferences(key, lambda current: current - {session})
    logger.info("[preference_store:remove] key=%s title=%r", key[:16], session.title)
    return session


def clear() -> None:
    with _lock:
        _preferences.clear()
