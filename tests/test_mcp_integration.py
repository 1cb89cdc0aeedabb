"""
Integration tests for MCP tool, prompt and resource endpoints.

Uses mocks for retrieval so tests do not require Milvus or HF API. Preference tools
run against the bundled venue dataset.
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from conference_assistant.core import preference_store
from conference_assistant.core.config import VENUE_RESOURCE_URI
from conference_assistant.main import app
from conference_assistant.schemas.conference import ConferenceSessionSearchResult


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_preferences():
    preference_store.clear()
    yield
    preference_store.clear()


def _result(title: str, score: float) -> ConferenceSessionSearchResult:
    return ConferenceSessionSearchResult(
        title=title,
        startsAt="2025-11-06T10:10:00",
        endsAt="2025-11-06T11:00:00",
        room="Room 2",
        speakers=["Urs Peter"],
        score=score,
    )


# --- discovery ---

def test_mcp_list_tools(client: TestClient) -> None:
    response = client.get("/mcp/tools")
    assert response.status_code == 200
    names = [t["name"] for t in response.json()["tools"]]
    assert names == [
        "conference-session-search",
        "get-preferred-sessions",
        "add-preferred-sessions",
        "remove-preferred-sessions",
    ]


# --- conference-session-search ---

def test_mcp_search_sessions_returns_results(client: TestClient) -> None:
    """POST /mcp/tools/conference-session-search returns 200 and { results, notifications }."""
    fake = [_result("Building AI Assistants with Spring AI", 0.82)]
    with patch("conference_assistant.mcp.server.search_sessions", return_value=fake) as mock_search:
        response = client.post(
            "/mcp/tools/conference-session-search",
            json={"query": "spring ai", "progressToken": "token-1"},
        )
    assert response.status_code == 200
    mock_search.assert_called_once_with("spring ai")
    data = response.json()
    assert data["results"] == [{
        "title": "Building AI Assistants with Spring AI",
        "startsAt": "2025-11-06T10:10:00",
        "endsAt": "2025-11-06T11:00:00",
        "room": "Room 2",
        "speakers": ["Urs Peter"],
        "score": 0.82,
    }]
    methods = [n["method"] for n in data["notifications"]]
    assert methods.count("notifications/message") == 2
    progress = [n["params"]["progress"] for n in data["notifications"] if n["method"] == "notifications/progress"]
    assert progress == [0.0, 1.0]


def test_mcp_search_sessions_without_progress_token_sends_no_progress(client: TestClient) -> None:
    with patch("conference_assistant.mcp.server.search_sessions", return_value=[]):
        response = client.post("/mcp/tools/conference-session-search", json={"query": "kotlin"})
    assert response.status_code == 200
    assert all(n["method"] != "notifications/progress" for n in response.json()["notifications"])


def test_mcp_search_sessions_empty_query_returns_empty_results(client: TestClient) -> None:
    """POST with empty query returns 200 and empty results (search_sessions not called)."""
    with patch("conference_assistant.mcp.server.search_sessions") as mock_search:
        response = client.post("/mcp/tools/conference-session-search", json={"query": ""})
    assert response.status_code == 200
    assert response.json()["results"] == []
    mock_search.assert_not_called()


def test_mcp_search_sessions_missing_body_returns_422(client: TestClient) -> None:
    response = client.post("/mcp/tools/conference-session-search")
    assert response.status_code == 422


# --- session id header ---

def test_mcp_session_id_is_issued_when_missing(client: TestClient) -> None:
    response = client.post("/mcp/tools/get-preferred-sessions")
    assert response.status_code == 200
    assert response.headers.get("Mcp-Session-Id")


def test_mcp_session_id_is_echoed(client: TestClient) -> None:
    response = client.post("/mcp/tools/get-preferred-sessions", headers={"Mcp-Session-Id": "abc"})
    assert response.headers["Mcp-Session-Id"] == "abc"


# --- preferences ---

def test_mcp_preferences_add_get_remove(client: TestClient) -> None:
    headers = {"Mcp-Session-Id": "session-1"}
    response = client.post("/mcp/tools/add-preferred-sessions", json={"sessionTitle": "kotlin coroutines"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Done"

    response = client.post("/mcp/tools/get-preferred-sessions", headers=headers)
    sessions = response.json()["sessions"]
    assert [s["title"] for s in sessions] == ["Kotlin Coroutines Deep Dive"]
    assert sessions[0]["speakers"] == ["Lotte Jansen"]

    response = client.post("/mcp/tools/remove-preferred-sessions", json={"sessionTitle": "Kotlin"}, headers=headers)
    assert response.status_code == 200
    response = client.post("/mcp/tools/get-preferred-sessions", headers=headers)
    assert response.json()["sessions"] == []


def test_mcp_preferences_are_scoped_to_session_id(client: TestClient) -> None:
    client.post("/mcp/tools/add-preferred-sessions", json={"sessionTitle": "Secure"}, headers={"Mcp-Session-Id": "a"})
    response = client.post("/mcp/tools/get-preferred-sessions", headers={"Mcp-Session-Id": "b"})
    assert response.json()["sessions"] == []


def test_mcp_preferences_sorted_by_start(client: TestClient) -> None:
    headers = {"Mcp-Session-Id": "session-2"}
    for title in ("Closing Keynote", "Opening Keynote", "Virtual Threads"):
        client.post("/mcp/tools/add-preferred-sessions", json={"sessionTitle": title}, headers=headers)
    response = client.post("/mcp/tools/get-preferred-sessions", headers=headers)
    titles = [s["title"] for s in response.json()["sessions"]]
    assert titles == [
        "Opening Keynote: The Next Decade of Java",
        "Virtual Threads in Production",
        "Closing Keynote: Developers and the Machines",
    ]


def test_mcp_add_unknown_session_returns_404(client: TestClient) -> None:
    response = client.post("/mcp/tools/add-preferred-sessions", json={"sessionTitle": "Cobol for beginners"})
    assert response.status_code == 404
    assert "Cobol for beginners" in response.json()["detail"]


def test_mcp_add_missing_title_returns_422(client: TestClient) -> None:
    response = client.post("/mcp/tools/add-preferred-sessions", json={})
    assert response.status_code == 422


# --- prompt and resource ---

def test_mcp_advisor_prompt(client: TestClient) -> None:
    assert client.get("/mcp/prompts").json()["prompts"][0]["name"] == "jfall-advisor-prompt"
    response = client.get("/mcp/prompts/jfall-advisor-prompt")
    assert response.status_code == 200
    message = response.json()["messages"][0]
    assert message["role"] == "user"
    assert "JFall" in message["content"]["text"]


def test_mcp_read_venue_resource(client: TestClient) -> None:
    listed = client.get("/mcp/resources").json()["resources"]
    assert listed[0]["uri"] == VENUE_RESOURCE_URI
    response = client.get("/mcp/resources/read", params={"uri": VENUE_RESOURCE_URI})
    assert response.status_code == 200
    content = response.json()["contents"][0]
    assert content["mimeType"] == "application/json"
    assert json.loads(content["text"])["conference"] == "JFall 2025"


def test_mcp_read_unknown_resource_returns_404(client: TestClient) -> None:
    response = client.get("/mcp/resources/read", params={"uri": "static://data/other.json"})
    assert response.status_code == 404
