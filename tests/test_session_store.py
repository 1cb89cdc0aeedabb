"""Tests for the windowed chat memory."""

import pytest

from conference_assistant.core import session_store
from conference_assistant.core.config import CHAT_MEMORY_WINDOW


@pytest.fixture(autouse=True)
def clear_memory():
    session_store.clear()
    yield
    session_store.clear()


def test_history_keeps_last_window_messages() -> None:
    for i in range(CHAT_MEMORY_WINDOW + 5):
        session_store.append_message("c", "user", f"m{i}")
    history = session_store.get_history("c")
    assert len(history) == CHAT_MEMORY_WINDOW
    assert history[0]["content"] == "m5"
    assert history[-1]["content"] == f"m{CHAT_MEMORY_WINDOW + 4}"


def test_conversations_are_separate() -> None:
    session_store.append_message("a", "user", "hello")
    assert session_store.get_history("b") == []


def test_invalid_conversation_id_is_ignored() -> None:
    session_store.append_message("", "user", "hello")
    assert session_store.get_history("") == []


def test_clear_one_conversation() -> None:
    session_store.append_message("a", "user", "x")
    session_store.append_message("b", "user", "y")
    session_store.clear("a")
    assert session_store.get_history("a") == []
    assert len(session_store.get_history("b")) == 1
