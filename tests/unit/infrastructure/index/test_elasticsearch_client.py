"""Unit tests for ElasticsearchIndexClient error mapping and response parsing."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig, SerializationError
from elasticsearch import (
    ApiError,
    BadRequestError,
    ConnectionError,
    ConnectionTimeout,
    NotFoundError,
)

from orderindex.domain.shared.error import (
    ErrorKind,
    IndexConnectionError,
    IndexRequestError,
)
from orderindex.infrastructure.index.elasticsearch.client import ElasticsearchIndexClient


def make_meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


def make_client() -> tuple[ElasticsearchIndexClient, MagicMock]:
    es = MagicMock()
    es.index = AsyncMock()
    es.delete = AsyncMock()
    es.exists = AsyncMock(return_value=True)
    es.search = AsyncMock()
    es.close = AsyncMock()
    es.indices.exists = AsyncMock(return_value=False)
    es.indices.create = AsyncMock()
    return ElasticsearchIndexClient(es, refresh="wait_for"), es


class TestWrites:
    @pytest.mark.asyncio
    async def test_upsert_indexes_by_id(self):
        client, es = make_client()

        await client.upsert("orders", "abc", {"uuid": "abc"})

        es.index.assert_awaited_once_with(
            index="orders", id="abc", document={"uuid": "abc"}, refresh="wait_for"
        )

    @pytest.mark.asyncio
    async def test_unreachable_cluster_is_connection_error(self):
        client, es = make_client()
        es.index.side_effect = ConnectionError("connection refused")

        with pytest.raises(IndexConnectionError) as exc_info:
            await client.upsert("orders", "abc", {})

        assert exc_info.value.kind == ErrorKind.CONNECTION
        assert exc_info.value.code == "INDEX_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_rejected_request_is_request_error_with_status(self):
        client, es = make_client()
        es.index.side_effect = BadRequestError(
            "mapper_parsing_exception", make_meta(400), {"error": "bad"}
        )

        with pytest.raises(IndexRequestError) as exc_info:
            await client.upsert("orders", "abc", {})

        assert exc_info.value.status == 400
        assert exc_info.value.kind == ErrorKind.INDEX_REQUEST
        assert isinstance(exc_info.value.__cause__, ApiError)

    @pytest.mark.asyncio
    async def test_delete_missing_document_returns_false(self):
        client, es = make_client()
        es.delete.side_effect = NotFoundError("not_found", make_meta(404), {"result": "not_found"})

        assert await client.delete("orders", "abc") is False

    @pytest.mark.asyncio
    async def test_delete_existing_document_returns_true(self):
        client, _ = make_client()

        assert await client.delete("orders", "abc") is True


class TestSearch:
    @pytest.mark.asyncio
    async def test_parses_hits_and_total(self):
        client, es = make_client()
        es.search.return_value = {
            "hits": {
                "total": {"value": 12, "relation": "eq"},
                "hits": [
                    {"_id": "a", "_source": {"uuid": "a"}},
                    {"_id": "b", "_source": {"uuid": "b"}},
                ],
            }
        }

        response = await client.search("orders", {"match_all": {}}, from_=5, size=2)

        assert response.total == 12
        assert [hit.id for hit in response.hits] == ["a", "b"]
        assert response.hits[0].source == {"uuid": "a"}
        es.search.assert_awaited_once_with(
            index="orders",
            query={"match_all": {}},
            from_=5,
            size=2,
            sort=None,
            track_total_hits=True,
        )

    @pytest.mark.asyncio
    async def test_search_failure_is_mapped(self):
        client, es = make_client()
        es.search.side_effect = ConnectionError("timeout")

        with pytest.raises(IndexConnectionError):
            await client.search("orders", {"match_all": {}})

    @pytest.mark.asyncio
    async def test_undecodable_response_is_connection_error(self):
        client, es = make_client()
        es.search.side_effect = SerializationError("Unable to deserialize as JSON")

        with pytest.raises(IndexConnectionError) as exc_info:
            await client.search("orders", {"match_all": {}})

        assert exc_info.value.code == "INDEX_TRANSPORT_FAILED"
        assert exc_info.value.details == {"operation": "search", "index": "orders"}
        assert isinstance(exc_info.value.__cause__, SerializationError)

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        client, es = make_client()
        es.exists.side_effect = ConnectionTimeout("timed out")

        with pytest.raises(IndexConnectionError) as exc_info:
            await client.exists("orders", "abc")

        assert exc_info.value.code == "INDEX_UNAVAILABLE"


class TestEnsureIndex:
    @pytest.mark.asyncio
    async def test_creates_missing_index(self):
        client, es = make_client()

        assert await client.ensure_index("orders", {"properties": {}}) is True
        es.indices.create.assert_awaited_once_with(index="orders", mappings={"properties": {}})

    @pytest.mark.asyncio
    async def test_existing_index_is_left_alone(self):
        client, es = make_client()
        es.indices.exists.return_value = True

        assert await client.ensure_index("orders", {}) is False
        es.indices.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_creation_is_not_an_error(self):
        client, es = make_client()
        es.indices.create.side_effect = BadRequestError(
            "resource_already_exists_exception",
            make_meta(400),
            {"error": {"type": "resource_already_exists_exception"}},
        )

        assert await client.ensure_index("orders", {}) is False
