"""
Vector store client: Milvus Cloud connection, embeddings (HF Inference API), and session documents.

Responsibility: Connect to Milvus, embed texts via all-MiniLM-L6-v2, store session
documents with their metadata, and run similarity searches over them.
"""

import logging
from typing import Any

import httpx
from pymilvus import MilvusClient, MilvusException

from conference_assistant.core.config import (
    COLLECTION_NAME,
    EMBED_API_TIMEOUT,
    EMBED_BATCH_SIZE,
    HF_API_KEY,
    HF_EMBED_MODEL,
    MILVUS_TOKEN,
    MILVUS_URI,
    VECTOR_DIM,
)
from conference_assistant.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

HF_API_URL_ROUTER = (
    "https://router.huggingface.co/hf-inference/models/"
    f"{HF_EMBED_MODEL}/pipeline/feature-extraction"
)
HF_API_URL_STANDARD = f"https://api-inference.huggingface.co/models/{HF_EMBED_MODEL}"

# Metadata stored next to each session document (Milvus dynamic fields)
METADATA_FIELDS = [
    "id",
    "title",
    "room",
    "category",
    "speakers",
    "startsAtLocalDateTime",
    "endsAtLocalDateTime",
    "startsAt",
    "endsAt",
    "conferenceDay",
    "dayIndex",
    "phaseOfDay",
    "durationMinutes",
]


def _normalize(vec: list[float]) -> list[float]:
    norm = sum(x * x for x in vec) ** 0.5
    if norm == 0:
        norm = 1.0
    return [x / norm for x in vec]


def embed_texts(
    texts: list[str], batch_size: int | None = None
) -> list[list[float]]:
    """
    Batch embed texts using Hugging Face Inference API (all-MiniLM-L6-v2).

    Returns list of 384-dim vectors (normalized for cosine similarity).
    """
    batch_size = batch_size if batch_size is not None else EMBED_BATCH_SIZE
    if not texts:
        return []
    if not HF_API_KEY:
        raise ServiceUnavailableError(
            "HF_API_KEY must be set in .env. Get a token from https://huggingface.co/settings/tokens"
        )

    headers = {
        "Authorization": f"Bearer {HF_API_KEY}",
        "Content-Type": "application/json",
    }
    all_embeddings: list[list[float]] = []

    with httpx.Client(timeout=EMBED_API_TIMEOUT) as client:
        for i in range(0, len(texts), batch_size):
            batch = texts[i : i + batch_size]
            payload = {"inputs": batch, "options": {"wait_for_model": True}}
            response = None
            last_error: str | None = None

            for api_url in (HF_API_URL_ROUTER, HF_API_URL_STANDARD):
                try:
                    response = client.post(api_url, json=payload, headers=headers)
                except httpx.HTTPError as e:
                    last_error = str(e)
                    if api_url == HF_API_URL_STANDARD:
                        raise ServiceUnavailableError(f"HF Inference API unreachable: {e}") from e
                    continue
                if response.status_code == 403 and api_url == HF_API_URL_ROUTER:
                    last_error = response.text
                    continue
                break

            if response is None or response.status_code != 200:
                msg = response.text if response is not None else last_error
                if response is not None and response.status_code == 503:
                    raise ServiceUnavailableError(f"HF model is loading. Retry later. {msg}")
                if response is not None and response.status_code in (401, 403):
                    raise ServiceUnavailableError(
                        f"HF token rejected; create a token with Inference API read access. {msg}"
                    )
                if response is not None and response.status_code >= 500:
                    raise ServiceUnavailableError(f"HF Inference API error {response.status_code}. {msg}")
                raise RuntimeError(f"HF API error: {msg}")

            result = response.json()
            if isinstance(result, list) and result and isinstance(result[0], list):
                batch_emb = result
            else:
                batch_emb = [
                    item if isinstance(item, list) else [item]
                    for item in (result if isinstance(result, list) else [result])
                ]
            all_embeddings.extend(_normalize(vec) for vec in batch_emb)

    logger.info("[vector_store:embed_texts] IN  texts=%d OUT vectors=%d", len(texts), len(all_embeddings))
    return all_embeddings


def get_milvus_client() -> Any:
    """
    Connect to Milvus Cloud and return a client. Creates the session collection
    if it does not exist (dim 384 for all-MiniLM-L6-v2, dynamic metadata fields).
    """
    if not MILVUS_URI or not MILVUS_TOKEN:
        raise ServiceUnavailableError("MILVUS_URI and MILVUS_TOKEN must be set in .env")

    try:
        client = MilvusClient(uri=MILVUS_URI, token=MILVUS_TOKEN)
        exists = client.has_collection(COLLECTION_NAME)
    except MilvusException as e:
        raise ServiceUnavailableError(f"Milvus unreachable at {MILVUS_URI}: {e}") from e
    logger.info("Milvus connection established")

    if not exists:
        client.create_collection(
            collection_name=COLLECTION_NAME,
            dimension=VECTOR_DIM,
            primary_field_name="pk",
            vector_field_name="vector",
            metric_type="COSINE",
            auto_id=True,
            enable_dynamic_field=True,
        )
        logger.info("Collection %s created (dim=%s)", COLLECTION_NAME, VECTOR_DIM)
    return client


def store_documents(documents: list[dict]) -> int:
    """
    Embed each document text, insert it into Milvus with its metadata as
    dynamic fields, then flush the collection. Returns the number inserted.
    """
    if not documents:
        return 0

    embeddings = embed_texts([d["text"] for d in documents])

    client = get_milvus_client()
    rows = []
    for doc, emb in zip(documents, embeddings):
        row = {"vector": emb, "text": doc["text"]}
        row.update(doc.get("metadata") or {})
        rows.append(row)

    client.insert(collection_name=COLLECTION_NAME, data=rows)
    client.flush(collection_name=COLLECTION_NAME)
    logger.info("Embedded and stored %d documents", len(rows))
    return len(rows)


def count_documents() -> int:
    """
    Number of stored documents; 0 for a freshly created collection.
    Raises ServiceUnavailableError when Milvus is misconfigured or unreachable.
    """
    client = get_milvus_client()
    try:
        stats = client.get_collection_stats(collection_name=COLLECTION_NAME)
    except MilvusException as e:
        raise ServiceUnavailableError(f"Milvus collection stats failed: {e}") from e
    return int(stats.get("row_count", 0))


def similarity_search(query: str, top_k: int, threshold: float) -> list[dict]:
    """
    Embed query, search Milvus, return hits scoring at least threshold,
    best first, as {"text", "score", "metadata"}.
    """
    logger.info("[vector_store:similarity_search] IN  query=%r top_k=%d threshold=%.2f", query, top_k, threshold)
    if not query or not query.strip():
        return []

    query_vec = embed_texts([query.strip()])
    if not query_vec:
        logger.warning("[vector_store:similarity_search] embed_texts returned empty")
        return []

    client = get_milvus_client()
    results = client.search(
        collection_name=COLLECTION_NAME,
        data=query_vec,
        limit=top_k,
        output_fields=["text", *METADATA_FIELDS],
        search_params={"metric_type": "COSINE"},
    )

    # results: list of list of hits (one list per query vector)
    hits = results[0] if results else []
    documents = []
    for h in hits:
        score = float(h.get("distance", h.get("score", 0.0)))
        if score < threshold:
            continue
        entity = h.get("entity") or h
        documents.append({
            "text": entity.get("text", ""),
            "score": score,
            "metadata": {k: entity[k] for k in METADATA_FIELDS if k in entity},
        })
    documents.sort(key=lambda d: -d["score"])
    logger.info("[vector_store:similarity_search] OUT hits=%d kept=%d first_titles=%s",
                len(hits), len(documents), [d["metadata"].get("title") for d in documents[:5]])
    return documents


def clear_collection() -> None:
    """Drop the session collection. It is recreated empty on the next get_milvus_client() call."""
    client = get_milvus_client()
    if client.has_collection(COLLECTION_NAME):
        client.drop_collection(collection_name=COLLECTION_NAME)
        logger.info("Collection %s dropped", COLLECTION_NAME)
