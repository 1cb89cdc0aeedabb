"""
MCP-style server for the conference domain: the chat tools, the advisor prompt and
the venue resource behind a standardized interface for external agents.

The MCP session is identified by the Mcp-Session-Id header (issued when absent and
always echoed back); preference tools are scoped to it. Tool responses carry the
logging and progress notifications emitted while the tool ran.
"""

import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from pydantic import BaseModel, Field

from conference_assistant.agent.prompts import MCP_PROMPT
from conference_assistant.agent.tools import (
    ADD_PREFERRED_TOOL,
    DONE,
    GET_PREFERRED_TOOL,
    REMOVE_PREFERRED_TOOL,
    SEARCH_TOOL,
    VENUE_TOOL,
)
from conference_assistant.core import preference_store
from conference_assistant.core.config import VENUE_RESOURCE_URI
from conference_assistant.core.errors import SessionNotFoundError
from conference_assistant.ingest.loader import load_venue_information
from conference_assistant.services.retrieval_service import search_sessions

logger = logging.getLogger(__name__)

SESSION_HEADER = "Mcp-Session-Id"
ADVISOR_PROMPT = "jfall-advisor-prompt"

# MCP tool schema for discovery / documentation
tools = [
    {
        "name": SEARCH_TOOL,
        "description": "Performs a similarity search for conference sessions and returns matching results with a score.",
        "input_schema": {"query": "string", "progressToken": "string (optional)"},
    },
    {
        "name": GET_PREFERRED_TOOL,
        "description": "Get all preferred sessions of the user.",
        "input_schema": {},
    },
    {
        "name": ADD_PREFERRED_TOOL,
        "description": "Add a session to preferences for the user",
        "input_schema": {"sessionTitle": "string (the session title of the session to add)"},
    },
    {
        "name": REMOVE_PREFERRED_TOOL,
        "description": "Remove a session from preferences for the user.",
        "input_schema": {"sessionTitle": "string (the session title of the session to remove)"},
    },
]

prompts = [
    {
        "name": ADVISOR_PROMPT,
        "description": "Returns the JFall assistant system prompt used by the chat server.",
        "arguments": [],
    },
]

resources = [
    {
        "name": VENUE_TOOL,
        "description": "Returns general JFall 2025 venue information including address, dates, hotels, and the detailed session schedule in JSON form.",
        "uri": VENUE_RESOURCE_URI,
        "mimeType": "application/json",
    },
]

mcp_router = APIRouter(tags=["mcp"])


class ToolExchange:
    """Per-call exchange: the MCP session id plus the notifications sent to the client."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.notifications: list[dict[str, Any]] = []

    def info(self, message: str) -> None:
        self.notifications.append({"method": "notifications/message", "params": {"level": "info", "data": message}})

    def progress(self, progress_token: str | None, progress: float, total: float, message: str) -> None:
        if not progress_token:
            return
        self.notifications.append({
            "method": "notifications/progress",
            "params": {"progressToken": progress_token, "progress": progress, "total": total, "message": message},
        })


def get_exchange(
    response: Response,
    mcp_session_id: str | None = Header(default=None, alias=SESSION_HEADER),
) -> ToolExchange:
    session_id = (mcp_session_id or "").strip() or uuid.uuid4().hex
    response.headers[SESSION_HEADER] = session_id
    return ToolExchange(session_id)


# --- discovery ---

@mcp_router.get("/tools", summary="MCP: list tools")
def mcp_list_tools() -> dict[str, list[dict[str, Any]]]:
    return {"tools": tools}


@mcp_router.get("/prompts", summary="MCP: list prompts")
def mcp_list_prompts() -> dict[str, list[dict[str, Any]]]:
    return {"prompts": prompts}


@mcp_router.get("/resources", summary="MCP: list resources")
def mcp_list_resources() -> dict[str, list[dict[str, Any]]]:
    return {"resources": resources}


# --- conference-session-search ---

class SearchSessionsRequest(BaseModel):
    """Request body for MCP tool conference-session-search."""
    query: str = ""
    progressToken: str | None = None


@mcp_router.post(
    f"/tools/{SEARCH_TOOL}",
    summary=f"MCP tool: {SEARCH_TOOL}",
    description="This endpoint acts as an MCP tool server, allowing external agents to call session retrieval through a standardized interface.",
)
def mcp_search_sessions(body: SearchSessionsRequest, exchange: ToolExchange = Depends(get_exchange)) -> dict[str, Any]:
    query = (body.query or "").strip()
    logger.info("MCP tool called: %s query=%r", SEARCH_TOOL, query)
    exchange.info(f"Start searching sessions for: {query}")
    exchange.progress(body.progressToken, 0.0, 1.0, f"Start searching sessions for {query}")
    results = search_sessions(query) if query else []
    exchange.info(f"Found {len(results)} sessions for: {query}")
    exchange.progress(body.progressToken, 1.0, 1.0, f"Done searching sessions for {query}")
    return {"results": [r.model_dump() for r in results], "notifications": exchange.notifications}


# --- preferences ---

class SessionTitleRequest(BaseModel):
    """Request body for the add/remove preference tools."""
    sessionTitle: str = Field(..., min_length=1)


@mcp_router.post(f"/tools/{GET_PREFERRED_TOOL}", summary=f"MCP tool: {GET_PREFERRED_TOOL}")
def mcp_get_preferred_sessions(exchange: ToolExchange = Depends(get_exchange)) -> dict[str, Any]:
    sessions = preference_store.get_preferred_sessions(exchange.session_id)
    logger.info("Found %d preferred sessions for conversationId: %s", len(sessions), exchange.session_id)
    ordered = sorted(sessions, key=lambda s: (s.startsAt, s.title))
    return {"sessions": [s.model_dump() for s in ordered], "notifications": exchange.notifications}


@mcp_router.post(f"/tools/{ADD_PREFERRED_TOOL}", summary=f"MCP tool: {ADD_PREFERRED_TOOL}")
def mcp_add_preferred_session(body: SessionTitleRequest, exchange: ToolExchange = Depends(get_exchange)) -> dict[str, Any]:
    try:
        preference_store.add_preferred_session(exchange.session_id, body.sessionTitle)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    logger.info("Added session: %s to preferences for conversationId: %s", body.sessionTitle, exchange.session_id)
    return {"status": DONE, "notifications": exchange.notifications}


@mcp_router.post(f"/tools/{REMOVE_PREFERRED_TOOL}", summary=f"MCP tool: {REMOVE_PREFERRED_TOOL}")
def mcp_remove_preferred_session(body: SessionTitleRequest, exchange: ToolExchange = Depends(get_exchange)) -> dict[str, Any]:
    try:
        preference_store.remove_preferred_session(exchange.session_id, body.sessionTitle)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    logger.info("Removed session: %s from preferences for conversationId: %s", body.sessionTitle, exchange.session_id)
    return {"status": DONE, "notifications": exchange.notifications}


# --- prompt ---

@mcp_router.get(f"/prompts/{ADVISOR_PROMPT}", summary=f"MCP prompt: {ADVISOR_PROMPT}")
def mcp_advisor_prompt() -> dict[str, Any]:
    logger.info("Returning jfall prompt.")
    return {
        "description": prompts[0]["description"],
        "messages": [{"role": "user", "content": {"type": "text", "text": MCP_PROMPT}}],
    }


# --- resource ---

@mcp_router.get("/resources/read", summary="MCP: read resource")
def mcp_read_resource(uri: str = "") -> dict[str, Any]:
    if uri != VENUE_RESOURCE_URI:
        raise HTTPException(status_code=404, detail=f"Unknown resource: {uri!r}")
    logger.info("Returning venue information.")
    return {"contents": [{"uri": uri, "mimeType": "application/json", "text": load_venue_information()}]}
