"""
Tests for tool dispatch and the tool error payload.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from conference_assistant.agent.tools import CONFERENCE_TOOLS, execute_tool
from conference_assistant.core import preference_store
from conference_assistant.core.errors import format_tool_error
from conference_assistant.schemas.conference import ConferenceSessionSearchResult


@pytest.fixture(autouse=True)
def clear_preferences():
    preference_store.clear()
    yield
    preference_store.clear()


CONTEXT = {"conversationId": "conv-1", "progressToken": "token-1"}


def test_tool_definitions_cover_all_tools() -> None:
    names = {t["function"]["name"] for t in CONFERENCE_TOOLS}
    assert names == {
        "general-venue-information-jfall",
        "conference-session-search",
        "get-preferred-sessions",
        "add-preferred-sessions",
        "remove-preferred-sessions",
    }


def test_venue_information_returns_dataset_text() -> None:
    result = execute_tool("general-venue-information-jfall", {}, CONTEXT)
    assert json.loads(result)["location"]["venue"] == "Pathe Ede"


def test_session_search_returns_json_results() -> None:
    fake = [ConferenceSessionSearchResult(
        title="Secure Your Supply Chain", startsAt="2025-11-06T15:50:00", endsAt="2025-11-06T16:40:00",
        room="Room 1", speakers=["Bas Hendriks"], score=0.71,
    )]
    with patch("conference_assistant.agent.tools.search_sessions", return_value=fake) as mock_search:
        result = execute_tool("conference-session-search", {"query": "supply chain"}, CONTEXT)
    mock_search.assert_called_once_with("supply chain")
    assert json.loads(result)[0]["title"] == "Secure Your Supply Chain"


def test_add_then_get_preferred_sessions() -> None:
    assert json.loads(execute_tool("add-preferred-sessions", {"sessionTitle": "domain-driven"}, CONTEXT)) == "Done"
    sessions = json.loads(execute_tool("get-preferred-sessions", {}, CONTEXT))
    assert [s["title"] for s in sessions] == ["Domain-Driven Design in Practice"]

    assert json.loads(execute_tool("remove-preferred-sessions", {"sessionTitle": "Domain"}, CONTEXT)) == "Done"
    assert json.loads(execute_tool("get-preferred-sessions", {}, CONTEXT)) == []


def test_unknown_session_title_returns_error_payload() -> None:
    result = json.loads(execute_tool("add-preferred-sessions", {"sessionTitle": "Rust in Space"}, CONTEXT))
    assert result["error"]["retriable"] is False
    assert "Rust in Space" in result["error"]["message"]


def test_missing_session_title_returns_error_payload() -> None:
    result = json.loads(execute_tool("add-preferred-sessions", {}, CONTEXT))
    assert result["error"]["message"] == "sessionTitle is required."


def test_unknown_tool_returns_error_payload() -> None:
    result = json.loads(execute_tool("book-hotel", {}, CONTEXT))
    assert result["error"]["message"] == "Unknown tool: book-hotel"


def test_search_transport_failure_is_retriable() -> None:
    def fail(_query):
        try:
            raise httpx.ConnectTimeout("connect timed out")
        except httpx.ConnectTimeout as e:
            raise RuntimeError("search failed") from e

    with patch("conference_assistant.agent.tools.search_sessions", side_effect=fail):
        result = json.loads(execute_tool("conference-session-search", {"query": "java"}, CONTEXT))
    assert result == {"error": {"message": "connect timed out", "retriable": True}}


def test_format_tool_error_collapses_whitespace_and_truncates() -> None:
    payload = json.loads(format_tool_error(ValueError("line one\n\n   line two\t" + "x" * 300)))
    message = payload["error"]["message"]
    assert message.startswith("line one line two x")
    assert len(message) == 200
    assert payload["error"]["retriable"] is False


def test_format_tool_error_without_message() -> None:
    payload = json.loads(format_tool_error(RuntimeError()))
    assert payload["error"]["message"] == "Unexpected error"
