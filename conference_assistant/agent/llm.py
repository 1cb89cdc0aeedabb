"""
Agent LLM: OpenAI chat completions with tool calling.

All OpenAI traffic (chat, transcription, speech) goes through one client built on
the logging httpx client from core.http_logging.
"""

import json
import logging
from functools import lru_cache
from typing import Any

from openai import OpenAI

from conference_assistant.core.config import OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_LLM_MODEL
from conference_assistant.core.errors import ServiceUnavailableError
from conference_assistant.core.http_logging import build_http_client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def openai_client() -> OpenAI:
    if not OPENAI_API_KEY:
        raise ServiceUnavailableError("OPENAI_API_KEY must be set in .env")
    return OpenAI(api_key=OPENAI_API_KEY, base_url=OPENAI_BASE_URL, http_client=build_http_client())


def _parse_tool_calls(raw_tool_calls) -> list[dict[str, Any]]:
    tool_calls = []
    for tc in raw_tool_calls or []:
        fn = getattr(tc, "function", None)
        if not fn:
            continue
        fargs = getattr(fn, "arguments", None) or "{}"
        try:
            args = json.loads(fargs) if isinstance(fargs, str) else fargs
        except json.JSONDecodeError:
            logger.warning("[llm] unparseable tool arguments for %s: %r", fn.name, fargs)
            args = {}
        tool_calls.append({"id": getattr(tc, "id", None) or "", "name": getattr(fn, "name", None) or "", "arguments": args or {}})
    return tool_calls


def chat_with_tools(
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]],
    max_tokens: int = 1024,
) -> tuple[str | None, list[dict[str, Any]] | None]:
    """
    Call OpenAI chat with tools.
    Returns (content, tool_calls). If tool_calls is non-empty, caller should execute
    them and call again with tool results; if content is set and no tool_calls, that's the final answer.
    """
    logger.info("[llm:chat_with_tools] IN  messages=%d tools=%d", len(messages), len(tools))
    response = openai_client().chat.completions.create(
        model=OPENAI_LLM_MODEL,
        messages=messages,
        tools=tools,
        max_tokens=max_tokens,
    )
    msg = response.choices[0].message if response.choices else None
    if not msg:
        return None, None
    content = (getattr(msg, "content", None) or "").strip() or None
    tool_calls = _parse_tool_calls(getattr(msg, "tool_calls", None))
    if tool_calls:
        logger.info("[llm:chat_with_tools] OUT tool_calls=%s", [t["name"] for t in tool_calls])
    if content:
        logger.info("[llm:chat_with_tools] OUT content_len=%d", len(content))
    return content, tool_calls or None
