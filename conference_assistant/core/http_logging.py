"""
HTTP client for model calls, with optional request/response logging.

The OpenAI SDK accepts an httpx.Client; event hooks on it log the raw traffic
(method, URL, headers, body) when LOG_HTTP_REQUESTS / LOG_HTTP_RESPONSES are on.
"""

import json
import logging

import httpx

from conference_assistant.core.config import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    LOG_HTTP_REQUESTS,
    LOG_HTTP_RESPONSES,
)

logger = logging.getLogger(__name__)


def to_json_or_raw(body: bytes) -> str:
    """Pretty-print a JSON body; fall back to the decoded bytes."""
    try:
        return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
    except (ValueError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")


def _safe_headers(headers: httpx.Headers) -> dict[str, str]:
    return {k: ("***" if k.lower() == "authorization" else v) for k, v in headers.items()}


def log_request(request: httpx.Request) -> None:
    body = request.read()
    logger.info(
        "Request:\n\tRequest: %s %s\n\tHeaders: %s\n\tBody: %s",
        request.method,
        request.url,
        _safe_headers(request.headers),
        to_json_or_raw(body),
    )


def log_response(response: httpx.Response) -> None:
    # Buffer the body so the SDK can still consume it after we log it.
    body = response.read()
    logger.info(
        "Response:\n\tResponse: %s %s\n\tHeaders: %s\n\tBody: %s",
        response.status_code,
        response.reason_phrase,
        dict(response.headers),
        to_json_or_raw(body),
    )


def build_http_client(
    log_requests: bool = LOG_HTTP_REQUESTS,
    log_responses: bool = LOG_HTTP_RESPONSES,
) -> httpx.Client:
    """httpx client with the configured timeouts and logging hooks."""
    hooks: dict[str, list] = {"request": [], "response": []}
    if log_requests:
        hooks["request"].append(log_request)
    if log_responses:
        hooks["response"].append(log_response)
    timeout = httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT)
    return httpx.Client(timeout=timeout, event_hooks=hooks)
