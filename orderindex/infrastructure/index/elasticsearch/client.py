"""Elasticsearch adapter implementing SearchIndexClient."""

import logging
from typing import Any

from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    ConnectionError,
    ConnectionTimeout,
    NotFoundError,
    TransportError,
)

from orderindex.domain.shared.error import IndexConnectionError, IndexRequestError
from orderindex.domain.shared.port.search_index import (
    Document,
    SearchHit,
    SearchIndexClient,
    SearchResponse,
)
from orderindex.infrastructure.index.elasticsearch.config import ElasticsearchConfig

logger = logging.getLogger(__name__)


def _api_error(operation: str, index: str, error: ApiError) -> IndexRequestError:
    return IndexRequestError(
        f"Elasticsearch {operation} on '{index}' failed: {error.message}",
        status=error.meta.status if error.meta is not None else None,
        code="INDEX_REQUEST_FAILED",
        details={"operation": operation, "index": index, "body": error.body},
    )


def _transport_error(operation: str, index: str, error: TransportError) -> IndexConnectionError:
    # No HTTP response to report, or a body that could not be (de)serialized
    if isinstance(error, (ConnectionError, ConnectionTimeout)):
        message, code = "unreachable", "INDEX_UNAVAILABLE"
    else:
        message, code = "transport failed", "INDEX_TRANSPORT_FAILED"
    return IndexConnectionError(
        f"Elasticsearch {message} during {operation} on '{index}': {error}",
        code=code,
        details={"operation": operation, "index": index},
    )


class ElasticsearchIndexClient(SearchIndexClient):
    """SearchIndexClient backed by elasticsearch.AsyncElasticsearch.

    Transport failures, including bodies that fail to (de)serialize, raise
    IndexConnectionError; any response the cluster rejects raises
    IndexRequestError. Deleting or checking a missing document is not
    an error.
    """

    def __init__(self, client: AsyncElasticsearch, refresh: bool | str = "wait_for") -> None:
        self._client = client
        self._refresh = refresh

    @classmethod
    def from_config(cls, config: ElasticsearchConfig) -> "ElasticsearchIndexClient":
        client = AsyncElasticsearch(
            hosts=config.hosts,
            api_key=config.api_key,
            request_timeout=config.timeout,
        )
        return cls(client, refresh=config.refresh)

    async def close(self) -> None:
        await self._client.close()

    async def upsert(self, index: str, id: str, document: Document) -> None:
        try:
            await self._client.index(index=index, id=id, document=document, refresh=self._refresh)
        except TransportError as e:
            raise _transport_error("index", index, e) from e
        except ApiError as e:
            raise _api_error("index", index, e) from e

    async def delete(self, index: str, id: str) -> bool:
        try:
            await self._client.delete(index=index, id=id, refresh=self._refresh)
        except NotFoundError:
            return False
        except TransportError as e:
            raise _transport_error("delete", index, e) from e
        except ApiError as e:
            raise _api_error("delete", index, e) from e
        return True

    async def exists(self, index: str, id: str) -> bool:
        try:
            response = await self._client.exists(index=index, id=id)
        except TransportError as e:
            raise _transport_error("exists", index, e) from e
        except ApiError as e:
            raise _api_error("exists", index, e) from e
        return bool(response)

    async def search(
        self,
        index: str,
        query: dict[str, Any],
        from_: int = 0,
        size: int = 10,
        sort: list[dict[str, Any]] | None = None,
    ) -> SearchResponse:
        try:
            response = await self._client.search(
                index=index,
                query=query,
                from_=from_,
                size=size,
                sort=sort,
                track_total_hits=True,
            )
        except TransportError as e:
            raise _transport_error("search", index, e) from e
        except ApiError as e:
            raise _api_error("search", index, e) from e

        hits = response["hits"]
        total = hits["total"]
        return SearchResponse(
            hits=[SearchHit(id=hit["_id"], source=hit["_source"]) for hit in hits["hits"]],
            total=total["value"] if isinstance(total, dict) else int(total),
        )

    async def ensure_index(self, index: str, mappings: dict[str, Any]) -> bool:
        try:
            if await self._client.indices.exists(index=index):
                return False
            await self._client.indices.create(index=index, mappings=mappings)
        except TransportError as e:
            raise _transport_error("create_index", index, e) from e
        except ApiError as e:
            # Another process created it between the check and the create
            if e.meta is not None and e.meta.status == 400 and "resource_already_exists" in str(
                e.body
            ):
                return False
            raise _api_error("create_index", index, e) from e
        logger.info(f"Created index '{index}'")
        return True
