#!/usr/bin/env python3
"""
Load the conference sessions into the Milvus "talks" collection.

Reads data/dataset-jfall.json, derives the time metadata, embeds the session
texts and stores them. An already populated collection is left alone unless
--force is given, which clears it first.

Run from project root:

    python scripts/ingest_sessions.py
    python scripts/ingest_sessions.py --force
"""

import argparse
import logging
import sys
from pathlib import Path

# Project root on path so "conference_assistant" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from conference_assistant.core.errors import ServiceUnavailableError
from conference_assistant.services.ingestion_service import ingest_sessions


def main() -> None:
    parser = argparse.ArgumentParser(description="Ingest conference sessions into the vector store.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Clear the collection and ingest again even if it already holds documents.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    try:
        total = ingest_sessions(force=args.force)
    except ServiceUnavailableError as e:
        print(f"Ingestion failed: {e.message}")
        sys.exit(1)
    print(f"Done. Collection holds {total} documents.")


if __name__ == "__main__":
    main()
