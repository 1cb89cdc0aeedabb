# Conference dataset loader. Single place for "JSON file on disk -> sessions / venue text".
# No embeddings, no vector DB.

import json
import logging
from functools import lru_cache
from pathlib import Path

import pandas as pd

from conference_assistant.core.config import DATA_DIR, SESSIONS_DATASET, VENUE_DATASET
from conference_assistant.schemas.conference import ConferenceSession, Dataset

logger = logging.getLogger(__name__)

SESSION_COLUMNS = ["title", "description", "startsAt", "endsAt", "room", "category", "speakers"]


def venue_dataset_path() -> Path:
    return DATA_DIR / VENUE_DATASET


def sessions_dataset_path() -> Path:
    return DATA_DIR / SESSIONS_DATASET


@lru_cache(maxsize=1)
def load_venue_information() -> str:
    """Raw venue dataset text. Handed to the model as-is."""
    return venue_dataset_path().read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def load_catalogue() -> tuple[ConferenceSession, ...]:
    """Sessions listed in the venue dataset; the catalogue preferences pick from."""
    dataset = Dataset.model_validate_json(load_venue_information())
    logger.info("[loader:load_catalogue] OUT sessions=%d", len(dataset.sessions))
    return tuple(dataset.sessions)


def read_sessions_frame(path: Path | None = None) -> pd.DataFrame:
    """
    Flatten the ingestion dataset into one row per session.

    The file is a Sessionize-style list of groups, each holding a "sessions" list.
    A plain {"sessions": [...]} object is accepted too.
    """
    path = path or sessions_dataset_path()
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    groups = [raw] if isinstance(raw, dict) else list(raw)
    frame = pd.DataFrame({"sessions": [g.get("sessions") or [] for g in groups]})
    exploded = frame.explode("sessions")["sessions"].dropna().tolist()
    sessions = pd.json_normalize(exploded)
    for column in SESSION_COLUMNS:
        if column not in sessions.columns:
            sessions[column] = None
    logger.info("[loader:read_sessions_frame] IN  path=%s OUT sessions=%d", Path(path).name, len(sessions))
    return sessions[SESSION_COLUMNS]
