"""
In-memory chat memory. Keyed by conversation id; history is not sent from the client.
Only the last CHAT_MEMORY_WINDOW messages of a conversation are kept.
"""

import logging
import threading
from typing import Any

from conference_assistant.core.config import CHAT_MEMORY_WINDOW

logger = logging.getLogger(__name__)

# conversation_id -> list of {"role": "user"|"assistant", "content": str}
_sessions: dict[str, list[dict[str, Any]]] = {}
_lock = threading.Lock()


def get_history(conversation_id: str) -> list[dict[str, Any]]:
    """Return the windowed history for the conversation (copy so caller cannot mutate store)."""
    if not conversation_id or not isinstance(conversation_id, str):
        logger.info("[session_store:get_history] IN  conversation_id=%r -> empty", conversation_id)
        return []
    with _lock:
        messages = _sessions.get(conversation_id) or []
        out = list(messages[-CHAT_MEMORY_WINDOW:])
    logger.info("[session_store:get_history] IN  conversation_id=%s OUT messages=%d", conversation_id[:16], len(out))
    return out


def append_message(conversation_id: str, role: str, content: str) -> None:
    """Append one message to the conversation and drop what falls out of the window."""
    if not conversation_id or not isinstance(conversation_id, str):
        logger.info("[session_store:append_message] skip invalid conversation_id=%r", conversation_id)
        return
    with _lock:
        messages = _sessions.setdefault(conversation_id, [])
        messages.append({"role": role, "content": content or ""})
        del messages[:-CHAT_MEMORY_WINDOW]
    logger.info("[session_store:append_message] conversation_id=%s role=%s content_len=%d", conversation_id[:16], role, len(content or ""))


def clear(conversation_id: str | None = None) -> None:
    """Forget one conversation, or every conversation when no id is given."""
    with _lock:
        if conversation_id is None:
            _sessions.clear()
        else:
            _sessions.pop(conversation_id, None)
