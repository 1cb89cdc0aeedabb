"""
Retrieval: semantic session search.

Responsibility: Query the vector store and collapse chunk hits into one result
per session title, keeping the best score.
"""

import logging

from conference_assistant.core.config import SEARCH_TOP_K, SIMILARITY_THRESHOLD
from conference_assistant.schemas.conference import ConferenceSessionSearchResult
from conference_assistant.services.vector_store import similarity_search

logger = logging.getLogger(__name__)


def _split_speakers(raw) -> list[str]:
    if isinstance(raw, (list, tuple)):
        return [str(s).strip() for s in raw if str(s).strip()]
    return [s.strip() for s in str(raw or "").split(",") if s.strip()]


def group_by_title(documents: list[dict]) -> list[ConferenceSessionSearchResult]:
    """One result per title, in first-seen order, built from that title's best hit."""
    best: dict[str, dict] = {}
    for doc in documents:
        title = str((doc.get("metadata") or {}).get("title", ""))
        if title not in best or doc.get("score", 0.0) > best[title].get("score", 0.0):
            best[title] = doc
    results = []
    for title, doc in best.items():
        meta = doc.get("metadata") or {}
        results.append(ConferenceSessionSearchResult(
            title=title,
            startsAt=str(meta.get("startsAtLocalDateTime", "")),
            endsAt=str(meta.get("endsAtLocalDateTime", "")),
            room=str(meta.get("room", "")),
            speakers=_split_speakers(meta.get("speakers")),
            score=float(doc.get("score") or 0.0),
        ))
    return results


def search_sessions(query: str) -> list[ConferenceSessionSearchResult]:
    logger.info("[retrieval:search_sessions] IN  query=%r", query)
    if not query or not query.strip():
        return []
    documents = similarity_search(query.strip(), top_k=SEARCH_TOP_K, threshold=SIMILARITY_THRESHOLD)
    results = group_by_title(documents)
    logger.info("[retrieval:search_sessions] OUT results=%d titles=%s", len(results), [r.title for r in results])
    return results
