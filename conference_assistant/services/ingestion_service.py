"""
Session ingestion: turn the conference dataset into vector-store documents.

Responsibility: Read the session catalogue, derive local-time metadata
(conference day, day index, phase of day, duration), and store one document
per session. Skipped when the store already holds sessions.
"""

import logging
import time
import uuid
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

import pandas as pd

from conference_assistant.core.config import COLLECTION_NAME, CONFERENCE_TIMEZONE
from conference_assistant.ingest.loader import read_sessions_frame
from conference_assistant.services.vector_store import clear_collection, count_documents, store_documents

logger = logging.getLogger(__name__)

ALL_DAY_MINUTES = 8 * 60


def phase_of_day(hour: int, duration_minutes: int) -> str:
    if duration_minutes >= ALL_DAY_MINUTES:
        return "ALL_DAY"
    if 5 <= hour <= 11:
        return "MORNING"
    if 12 <= hour <= 17:
        return "AFTERNOON"
    return "EVENING"


def _parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _join(value) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def build_session_documents(frame: pd.DataFrame, tz: tzinfo | None = None) -> list[dict]:
    """One {"text", "metadata"} document per session row."""
    tz = tz or ZoneInfo(CONFERENCE_TIMEZONE)
    rows = frame.to_dict(orient="records")
    starts = [_parse_instant(r["startsAt"]) for r in rows]
    days = sorted({s.astimezone(tz).date() for s in starts})
    day_index = {day: idx + 1 for idx, day in enumerate(days)}

    documents = []
    for row, start in zip(rows, starts):
        end = _parse_instant(row["endsAt"])
        start_local = start.astimezone(tz)
        end_local = end.astimezone(tz)
        duration_minutes = int((end - start).total_seconds() // 60)
        conference_day = start_local.date()
        documents.append({
            "text": f"title:{row['title']}, description:{_join(row.get('description'))}",
            "metadata": {
                "id": uuid.uuid4().hex,
                "title": str(row["title"]),
                "room": _join(row.get("room")),
                "category": _join(row.get("category")),
                "speakers": _join(row.get("speakers")),
                "startsAtLocalDateTime": start_local.replace(tzinfo=None).isoformat(),
                "endsAtLocalDateTime": end_local.replace(tzinfo=None).isoformat(),
                "startsAt": int(start.timestamp() * 1000),
                "endsAt": int(end.timestamp() * 1000),
                "conferenceDay": conference_day.isoformat(),
                "dayIndex": day_index.get(conference_day, 1),
                "phaseOfDay": phase_of_day(start_local.hour, duration_minutes),
                "durationMinutes": duration_minutes,
            },
        })
    logger.info("[ingestion:build_session_documents] OUT documents=%d days=%d", len(documents), len(days))
    return documents


def ingest_sessions(force: bool = False) -> int:
    """
    Load the session catalogue into the vector store unless it is already there.
    Returns the number of documents in the store afterwards.
    """
    count = count_documents()
    if count > 0 and not force:
        logger.info("%d sessions embeddings already present in %s", count, COLLECTION_NAME)
        return count

    if count > 0:
        clear_collection()
    logger.info("Start ingesting sessions into %s...", COLLECTION_NAME)
    start_time = time.monotonic()
    documents = build_session_documents(read_sessions_frame())
    store_documents(documents)
    total = count_documents()
    logger.info("Time taken to load %d sessions: %d ms", total, int((time.monotonic() - start_time) * 1000))
    return total
