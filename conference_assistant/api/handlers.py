"""
API handlers: read request data (e.g. UploadFile), call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from typing import TypeVar

from fastapi import HTTPException, UploadFile

from conference_assistant.agent.graph import run_chat
from conference_assistant.agent.prompts import SYSTEM_PROMPT, SYSTEM_PROMPT_AUDIO
from conference_assistant.core.config import FALLBACK_ANSWER
from conference_assistant.core.errors import ServiceUnavailableError
from conference_assistant.schemas.chat import ChatMessage, TranscribedMessageReply
from conference_assistant.services.audio_service import synthesize, transcribe

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _call(what: str, fn: Callable[[], T]) -> T:
    """Run a service call, mapping failures to 400/503/500."""
    try:
        return fn()
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ServiceUnavailableError as e:
        logger.warning("%s unavailable: %s", what, e.message)
        raise HTTPException(status_code=503, detail=e.message) from e
    except Exception as e:
        logger.exception("%s failed", what)
        raise HTTPException(status_code=500, detail=str(e)) from e


async def _call_in_thread(what: str, fn: Callable[[], T]) -> T:
    """Blocking model calls run in the thread pool so the event loop stays free."""
    return await asyncio.to_thread(_call, what, fn)


async def _transcribe_upload(audio: UploadFile) -> str:
    content = await audio.read()
    if not content:
        raise HTTPException(status_code=400, detail="Audio file is empty.")
    return await _call_in_thread("Transcription", lambda: transcribe(content, audio.filename))


def handle_chat(body: ChatMessage) -> str:
    answer = _call("Chat", lambda: run_chat(body.message, body.conversationId, SYSTEM_PROMPT))
    return answer or ""


async def handle_audio_in_text_out(audio: UploadFile, conversation_id: str | None) -> TranscribedMessageReply:
    """Transcribe, chat with the text prompt, reply with both texts."""
    transcribed = await _transcribe_upload(audio)
    if not transcribed:
        return TranscribedMessageReply(transcribedInputText="", outputText=FALLBACK_ANSWER)
    conversation_id = conversation_id or str(uuid.uuid4())
    answer = await _call_in_thread("Chat", lambda: run_chat(transcribed, conversation_id, SYSTEM_PROMPT))
    return TranscribedMessageReply(transcribedInputText=transcribed, outputText=answer or FALLBACK_ANSWER)


async def handle_audio_chat(audio: UploadFile, conversation_id: str | None) -> bytes:
    """Transcribe, chat with the crisp audio prompt, and speak the answer."""
    transcribed = await _transcribe_upload(audio)
    answer = None
    if transcribed:
        conversation_id = conversation_id or str(uuid.uuid4())
        answer = await _call_in_thread("Chat", lambda: run_chat(transcribed, conversation_id, SYSTEM_PROMPT_AUDIO))
    return await _call_in_thread("Speech", lambda: synthesize(answer or FALLBACK_ANSWER))
