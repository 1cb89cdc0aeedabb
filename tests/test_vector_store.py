"""
Tests for the vector store's failure mapping. MilvusClient and the HF endpoint are mocked.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from pymilvus import MilvusException

from conference_assistant.core.errors import ServiceUnavailableError
from conference_assistant.services import vector_store
from conference_assistant.services.ingestion_service import ingest_sessions

MILVUS_CONFIG = {"MILVUS_URI": "http://127.0.0.1:1", "MILVUS_TOKEN": "token"}


@pytest.fixture
def milvus_config():
    with patch.multiple(vector_store, **MILVUS_CONFIG):
        yield


def _unreachable(*args, **kwargs):
    raise MilvusException(code=2, message="Fail connecting to server on 127.0.0.1:1")


def test_get_milvus_client_unreachable_raises_service_unavailable(milvus_config) -> None:
    with patch.object(vector_store, "MilvusClient", side_effect=_unreachable):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            vector_store.get_milvus_client()
    assert "127.0.0.1:1" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, MilvusException)


def test_get_milvus_client_missing_config_raises_service_unavailable() -> None:
    with patch.multiple(vector_store, MILVUS_URI="", MILVUS_TOKEN=""):
        with pytest.raises(ServiceUnavailableError):
            vector_store.get_milvus_client()


def test_get_milvus_client_creates_missing_collection(milvus_config) -> None:
    client = MagicMock()
    client.has_collection.return_value = False
    with patch.object(vector_store, "MilvusClient", return_value=client):
        assert vector_store.get_milvus_client() is client
    kwargs = client.create_collection.call_args.kwargs
    assert kwargs["collection_name"] == "talks"
    assert kwargs["metric_type"] == "COSINE"
    assert kwargs["enable_dynamic_field"] is True


def test_count_documents_propagates_unreachable_store(milvus_config) -> None:
    with patch.object(vector_store, "MilvusClient", side_effect=_unreachable):
        with pytest.raises(ServiceUnavailableError):
            vector_store.count_documents()


def test_count_documents_stats_failure_raises_service_unavailable(milvus_config) -> None:
    client = MagicMock()
    client.has_collection.return_value = True
    client.get_collection_stats.side_effect = _unreachable
    with patch.object(vector_store, "MilvusClient", return_value=client):
        with pytest.raises(ServiceUnavailableError):
            vector_store.count_documents()


def test_count_documents_reads_row_count(milvus_config) -> None:
    client = MagicMock()
    client.has_collection.return_value = True
    client.get_collection_stats.return_value = {"row_count": 12}
    with patch.object(vector_store, "MilvusClient", return_value=client):
        assert vector_store.count_documents() == 12


def test_ingestion_stops_before_embedding_when_store_unreachable(milvus_config) -> None:
    with patch.object(vector_store, "MilvusClient", side_effect=_unreachable), \
            patch.object(vector_store, "embed_texts") as mock_embed:
        with pytest.raises(ServiceUnavailableError):
            ingest_sessions()
    mock_embed.assert_not_called()


def test_embed_texts_unreachable_endpoint_raises_service_unavailable() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport = httpx.MockTransport(refuse)
    real_client = httpx.Client

    def client_factory(**kwargs):
        return real_client(transport=transport, **kwargs)

    with patch.object(vector_store, "HF_API_KEY", "hf_test"), \
            patch.object(vector_store.httpx, "Client", side_effect=client_factory):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            vector_store.embed_texts(["hello"])
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_embed_texts_server_error_raises_service_unavailable() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    real_client = httpx.Client

    def client_factory(**kwargs):
        return real_client(transport=transport, **kwargs)

    with patch.object(vector_store, "HF_API_KEY", "hf_test"), \
            patch.object(vector_store.httpx, "Client", side_effect=client_factory):
        with pytest.raises(ServiceUnavailableError):
            vector_store.embed_texts(["hello"])
