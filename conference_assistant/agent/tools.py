"""
Agent tools: definitions and execution for the conference assistant.

Tools: general-venue-information-jfall, conference-session-search, get-preferred-sessions,
add-preferred-sessions, remove-preferred-sessions. Preference tools are scoped to the
conversationId carried in the tool context, never to a model-supplied argument.
"""

import json
import logging
from typing import Any

from conference_assistant.core import preference_store
from conference_assistant.core.errors import format_tool_error
from conference_assistant.ingest.loader import load_venue_information
from conference_assistant.services.retrieval_service import search_sessions

logger = logging.getLogger(__name__)

VENUE_TOOL = "general-venue-information-jfall"
SEARCH_TOOL = "conference-session-search"
GET_PREFERRED_TOOL = "get-preferred-sessions"
ADD_PREFERRED_TOOL = "add-preferred-sessions"
REMOVE_PREFERRED_TOOL = "remove-preferred-sessions"

DONE = "Done"

# OpenAI function-calling format: list of tool definitions
CONFERENCE_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": VENUE_TOOL,
            "description": "You provide general information about the JFall 2025 conference like location, address, ticket prices, hotels, dates, detailed session schedule, rooms etc.",
            "parameters": {"type": "object", "properties": {}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": SEARCH_TOOL,
            "description": "Performs a similarity search for conference sessions and returns matching results with score.",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The search query",
                    }
                },
                "required": ["query"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": GET_PREFERRED_TOOL,
            "description": "Get all preferred sessions of the user.",
            "parameters": {"type": "object", "properties": {}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": ADD_PREFERRED_TOOL,
            "description": "Add sessions to preferences for the user",
            "parameters": {
                "type": "object",
                "properties": {
                    "sessionTitle": {
                        "type": "string",
                        "description": "the session title of the session to add",
                    }
                },
                "required": ["sessionTitle"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": REMOVE_PREFERRED_TOOL,
            "description": "Remove sessions of preferences for the user.",
            "parameters": {
                "type": "object",
                "properties": {
                    "sessionTitle": {
                        "type": "string",
                        "description": "the session title of the session to remove",
                    }
                },
                "required": ["sessionTitle"],
            },
        },
    },
]


def _conversation_id(tool_context: dict[str, Any]) -> str:
    return str(tool_context["conversationId"])


def _session_title(args: dict[str, Any]) -> str:
    title = str(args.get("sessionTitle") or "").strip()
    if not title:
        raise ValueError("sessionTitle is required.")
    return title


def _dispatch(name: str, args: dict[str, Any], tool_context: dict[str, Any]) -> str:
    if name == VENUE_TOOL:
        return load_venue_information()

    if name == SEARCH_TOOL:
        query = str(args.get("query") or "").strip()
        if not query:
            raise ValueError("query is required.")
        results = search_sessions(query)
        return json.dumps([r.model_dump() for r in results])

    if name == GET_PREFERRED_TOOL:
        conversation_id = _conversation_id(tool_context)
        sessions = preference_store.get_preferred_sessions(conversation_id)
        logger.info("Found %d preferred sessions for conversationId: %s", len(sessions), conversation_id)
        ordered = sorted(sessions, key=lambda s: (s.startsAt, s.title))
        return json.dumps([s.model_dump() for s in ordered])

    if name == ADD_PREFERRED_TOOL:
        conversation_id = _conversation_id(tool_context)
        title = _session_title(args)
        preference_store.add_preferred_session(conversation_id, title)
        logger.info("Added session: %s to preferences for conversationId: %s", title, conversation_id)
        return json.dumps(DONE)

    if name == REMOVE_PREFERRED_TOOL:
        conversation_id = _conversation_id(tool_context)
        title = _session_title(args)
        preference_store.remove_preferred_session(conversation_id, title)
        logger.info("Removed session: %s from preferences for conversationId: %s", title, conversation_id)
        return json.dumps(DONE)

    raise LookupError(f"Unknown tool: {name}")


def execute_tool(name: str, arguments: dict[str, Any] | None, tool_context: dict[str, Any] | None = None) -> str:
    """
    Execute a tool by name with the given arguments. Returns a string result for the LLM;
    failures come back as an error payload instead of raising.
    """
    args = arguments or {}
    context = tool_context or {}
    logger.info("[tools] execute_tool name=%r arguments=%r progress_token=%s", name, args, context.get("progressToken"))
    try:
        return _dispatch(name, args, context)
    except Exception as e:
        logger.warning("[tools] %s failed: %s", name, e)
        return format_tool_error(e)
