"""
Speech in and out: OpenAI transcription (whisper) and text-to-speech.
"""

import logging
import uuid
from pathlib import Path

from conference_assistant.agent.llm import openai_client
from conference_assistant.core.config import (
    SPEECH_FORMAT,
    SPEECH_MODEL,
    SPEECH_SPEED,
    SPEECH_VOICE,
    TRANSCRIPTION_LANGUAGE,
    TRANSCRIPTION_MODEL,
    TRANSCRIPTION_PROMPT,
    TRANSCRIPTION_RESPONSE_FORMAT,
    TRANSCRIPTION_SUFFIXES,
    TRANSCRIPTION_TEMPERATURE,
)

logger = logging.getLogger(__name__)


def transcription_filename(original: str | None) -> str:
    """Random upload name; keeps the original suffix when whisper understands it, else .mp3."""
    suffix = Path(original or "").suffix.lower()
    if suffix not in TRANSCRIPTION_SUFFIXES:
        suffix = ".mp3"
    return uuid.uuid4().hex + suffix


def transcribe(audio: bytes, filename: str | None = None) -> str:
    name = transcription_filename(filename)
    logger.info("[audio:transcribe] IN  bytes=%d name=%s", len(audio), name)
    response = openai_client().audio.transcriptions.create(
        model=TRANSCRIPTION_MODEL,
        file=(name, audio),
        language=TRANSCRIPTION_LANGUAGE,
        prompt=TRANSCRIPTION_PROMPT,
        temperature=TRANSCRIPTION_TEMPERATURE,
        response_format=TRANSCRIPTION_RESPONSE_FORMAT,
    )
    text = (getattr(response, "text", "") or "").strip()
    logger.info("[audio:transcribe] OUT text=%r", text)
    return text


def synthesize(text: str) -> bytes:
    logger.info("[audio:synthesize] IN  text_len=%d", len(text))
    response = openai_client().audio.speech.create(
        model=SPEECH_MODEL,
        voice=SPEECH_VOICE,
        input=text,
        response_format=SPEECH_FORMAT,
        speed=SPEECH_SPEED,
    )
    audio = response.content
    logger.info("[audio:synthesize] OUT bytes=%d", len(audio))
    return audio
