"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# Project root (two levels above conference_assistant/core)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent

# Conference datasets
DATA_DIR: Path = Path(os.getenv("DATA_DIR", "").strip() or PROJECT_ROOT / "data")
SESSIONS_DATASET: str = "dataset-jfall.json"
VENUE_DATASET: str = "dataset-jfall-venue.json"
VENUE_RESOURCE_URI: str = f"static://data/{VENUE_DATASET}"

# Local time zone used for derived session metadata (conference day, phase of day)
CONFERENCE_TIMEZONE: str = (
    os.getenv("CONFERENCE_TIMEZONE", "Europe/Amsterdam").strip() or "Europe/Amsterdam"
)

# Load sessions into the vector store when the backend starts (skipped if already present)
INGEST_ON_STARTUP: bool = _env_flag("INGEST_ON_STARTUP", True)

# Milvus Cloud (from env)
MILVUS_URI: str = os.getenv("MILVUS_URI", "").strip()
MILVUS_TOKEN: str = os.getenv("MILVUS_TOKEN", "").strip()
COLLECTION_NAME: str = os.getenv("MILVUS_COLLECTION", "talks").strip() or "talks"

# Hugging Face (embeddings)
HF_API_KEY: str = os.getenv("HF_API_KEY", "").strip()
HF_EMBED_MODEL: str = "sentence-transformers/all-MiniLM-L6-v2"
VECTOR_DIM: int = 384
EMBED_BATCH_SIZE: int = 32

# Session search
SIMILARITY_THRESHOLD: float = 0.3
SEARCH_TOP_K: int = 10

# API timeouts (seconds)
EMBED_API_TIMEOUT: float = 30.0
HTTP_CONNECT_TIMEOUT: float = 10.0
HTTP_READ_TIMEOUT: float = 60.0

# Log raw model traffic (request/response bodies). Off by default: bodies can be large.
LOG_HTTP_REQUESTS: bool = _env_flag("LOG_HTTP_REQUESTS", False)
LOG_HTTP_RESPONSES: bool = _env_flag("LOG_HTTP_RESPONSES", False)

# OpenAI (chat, transcription, speech)
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

TRANSCRIPTION_MODEL: str = "whisper-1"
TRANSCRIPTION_LANGUAGE: str = "en"
TRANSCRIPTION_PROMPT: str = "Create transcription for this audio file."
TRANSCRIPTION_TEMPERATURE: float = 0.0
TRANSCRIPTION_RESPONSE_FORMAT: str = "json"
TRANSCRIPTION_SUFFIXES: frozenset[str] = frozenset(
    {".mp3", ".mp4", ".mpeg", ".mpga", ".m4a", ".wav", ".webm", ".ogg", ".flac"}
)

SPEECH_MODEL: str = "tts-1"
SPEECH_VOICE: str = "alloy"
SPEECH_FORMAT: str = "mp3"
SPEECH_SPEED: float = 1.0

# Agent
CHAT_MEMORY_WINDOW: int = 20
MAX_TOOL_ROUNDS: int = 8
AGENT_MAX_TOKENS: int = 1024
FALLBACK_ANSWER: str = "I couldn't understand that. Please try again."

# Servers
APP_PORT: int = int(os.getenv("APP_PORT", "8082"))
MCP_PORT: int = int(os.getenv("MCP_PORT", "8081"))

# Chat client
API_BASE: str = os.getenv("API_BASE", f"http://localhost:{APP_PORT}")
