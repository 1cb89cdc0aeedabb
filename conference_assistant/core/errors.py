"""
Application errors for clean API error handling.

Use ServiceUnavailableError when a dependency (vector store, embeddings, LLM)
is misconfigured or unreachable so the API can return 503 with a user-facing message.
Tool failures never reach the caller as exceptions: format_tool_error turns them
into a JSON payload the model can read and react to.
"""

import json
import re

import httpx

MAX_TOOL_ERROR_LEN = 200

_RETRIABLE = (httpx.TimeoutException, httpx.TransportError, TimeoutError, OSError)


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. vector store, embeddings API) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SessionNotFoundError(LookupError):
    """Raised when no conference session title starts with the given text."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"No session found matching title: {title!r}")


def format_tool_error(exc: BaseException) -> str:
    """Render a failed tool call as {"error": {"message", "retriable"}} JSON."""
    cause = exc.__cause__
    retriable = isinstance(cause, _RETRIABLE) or isinstance(exc, _RETRIABLE)
    msg = (str(cause) if cause else "") or str(exc) or "Unexpected error"
    msg = re.sub(r"\s+", " ", msg).strip()[:MAX_TOOL_ERROR_LEN]
    return json.dumps({"error": {"message": msg, "retriable": retriable}})
