"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import PlainTextResponse, Response

from conference_assistant.api.handlers import handle_audio_chat, handle_audio_in_text_out, handle_chat
from conference_assistant.schemas.chat import ChatMessage, TranscribedMessageReply

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Conference assistant backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Chat ---

@router.post(
    "/chat",
    response_class=PlainTextResponse,
    tags=["chat"],
    summary="Chat with the conference assistant",
    description="Send a message for a conversation; the reply is returned as plain text. Chat memory and preferred sessions are scoped to conversationId.",
)
def post_chat(body: ChatMessage) -> PlainTextResponse:
    logger.info("[api:post_chat] IN  message=%r conversation_id=%s", body.message, body.conversationId)
    answer = handle_chat(body)
    logger.info("[api:post_chat] OUT answer_len=%d", len(answer))
    return PlainTextResponse(answer)


@router.post(
    "/audio-in-text-out-chat",
    response_model=TranscribedMessageReply,
    tags=["chat"],
    summary="Ask by voice, answer in text",
    description="Multipart upload of a recorded question ('audio') and optional conversationId. Returns the transcription and the assistant's reply.",
)
async def post_audio_in_text_out_chat(
    audio: UploadFile = File(..., description="Recorded question (mp3, wav, webm, ...)."),
    conversationId: str | None = Form(None),
) -> TranscribedMessageReply:
    logger.info("[api:post_audio_in_text_out_chat] IN  filename=%r conversation_id=%s", audio.filename, conversationId)
    return await handle_audio_in_text_out(audio, conversationId)


@router.post(
    "/audio-chat",
    response_class=Response,
    tags=["chat"],
    summary="Ask by voice, answer by voice",
    description="Multipart upload of a recorded question ('audio') and optional conversationId. Returns the spoken reply as MP3 bytes.",
    responses={200: {"content": {"application/octet-stream": {}}}},
)
async def post_audio_chat(
    audio: UploadFile = File(..., description="Recorded question (mp3, wav, webm, ...)."),
    conversationId: str | None = Form(None),
) -> Response:
    logger.info("[api:post_audio_chat] IN  filename=%r conversation_id=%s", audio.filename, conversationId)
    speech = await handle_audio_chat(audio, conversationId)
    return Response(content=speech, media_type="application/octet-stream")
