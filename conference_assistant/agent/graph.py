"""
LangGraph agent: call model → (run tools → call model)* → answer.

The model sees the system prompt, the windowed chat memory and the new user message.
Tool calls run with a tool context (conversationId, progressToken) so preference
tools act on the caller's conversation. At most MAX_TOOL_ROUNDS tool rounds per turn.
"""

import json
import logging
import random
from typing import Literal, TypedDict

from langgraph.graph import END, StateGraph

from conference_assistant.agent.llm import chat_with_tools
from conference_assistant.agent.prompts import SYSTEM_PROMPT
from conference_assistant.agent.tools import CONFERENCE_TOOLS, execute_tool
from conference_assistant.core.config import AGENT_MAX_TOKENS, MAX_TOOL_ROUNDS
from conference_assistant.core.session_store import append_message, get_history

logger = logging.getLogger(__name__)


class ChatState(TypedDict):
    messages: list
    pending_tool_calls: list
    tool_context: dict
    tools_used: list
    rounds: int
    answer: str


def _call_model(state: ChatState) -> dict:
    """Node 1: ask the model for an answer or for tool calls."""
    messages = list(state.get("messages") or [])
    logger.info("[graph:call_model] IN  messages=%d round=%d", len(messages), state.get("rounds") or 0)
    content, tool_calls = chat_with_tools(messages, CONFERENCE_TOOLS, max_tokens=AGENT_MAX_TOKENS)
    if not tool_calls:
        logger.info("[graph:call_model] OUT answer_len=%d", len(content or ""))
        return {"answer": content or "", "pending_tool_calls": []}
    messages.append({
        "role": "assistant",
        "content": content or "",
        "tool_calls": [
            {"id": tc["id"], "type": "function", "function": {"name": tc["name"], "arguments": json.dumps(tc.get("arguments") or {})}}
            for tc in tool_calls
        ],
    })
    return {"messages": messages, "pending_tool_calls": tool_calls}


def _run_tools(state: ChatState) -> dict:
    """Node 2: execute requested tools and feed their results back as tool messages."""
    messages = list(state.get("messages") or [])
    tools_used = list(state.get("tools_used") or [])
    context = state.get("tool_context") or {}
    for tc in state.get("pending_tool_calls") or []:
        name = tc.get("name", "")
        result = execute_tool(name, tc.get("arguments") or {}, context)
        tools_used.append(name)
        messages.append({"role": "tool", "tool_call_id": tc.get("id", ""), "content": result})
    rounds = (state.get("rounds") or 0) + 1
    logger.info("[graph:run_tools] OUT round=%d tools_used=%s", rounds, tools_used)
    return {"messages": messages, "tools_used": tools_used, "rounds": rounds, "pending_tool_calls": []}


def _route_after_model(state: ChatState) -> Literal["run_tools", "__end__"]:
    pending = state.get("pending_tool_calls") or []
    rounds = state.get("rounds") or 0
    if pending and rounds < MAX_TOOL_ROUNDS:
        return "run_tools"
    if pending:
        logger.warning("[graph:route_after_model] tool round limit %d reached", MAX_TOOL_ROUNDS)
    return END


def build_graph():
    """
    Build and compile the chat graph.
    call_model → (run_tools → call_model)* → END.
    """
    graph = StateGraph(ChatState)

    graph.add_node("call_model", _call_model)
    graph.add_node("run_tools", _run_tools)

    graph.set_entry_point("call_model")
    graph.add_conditional_edges("call_model", _route_after_model)
    graph.add_edge("run_tools", "call_model")

    return graph.compile()


def build_messages(system_prompt: str, history: list, message: str) -> list[dict]:
    messages: list[dict] = [{"role": "system", "content": system_prompt}]
    for m in history:
        role = (m.get("role") or "user").strip().lower()
        content = (m.get("content") or "").strip()
        if role in ("user", "assistant") and content:
            messages.append({"role": role, "content": content})
    messages.append({"role": "user", "content": message})
    return messages


def run_chat(message: str, conversation_id: str, system_prompt: str = SYSTEM_PROMPT) -> str | None:
    """
    Answer one user message within a conversation. Returns None when the model produced no answer.
    Chat memory is updated with the user message and, when present, the answer.
    """
    if not message or not str(message).strip():
        raise ValueError("message is required")
    q = str(message).strip()
    history = get_history(conversation_id)
    logger.info("[run_chat] START conversation_id=%s message=%r history_len=%d", conversation_id, q, len(history))
    initial: ChatState = {
        "messages": build_messages(system_prompt, history, q),
        "pending_tool_calls": [],
        "tool_context": {
            "conversationId": conversation_id,
            "progressToken": f"token-{random.randint(0, 2**31 - 1)}",
        },
        "tools_used": [],
        "rounds": 0,
        "answer": "",
    }
    final = build_graph().invoke(initial)
    answer = (final.get("answer") or "").strip() or None
    append_message(conversation_id, "user", q)
    if answer:
        append_message(conversation_id, "assistant", answer)
    logger.info("[run_chat] END tools_used=%s answer_len=%d", final.get("tools_used"), len(answer or ""))
    return answer
