"""OrderQueryService - paginated reads served from the order index."""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from orderindex.domain.order.model.aggregate import Order
from orderindex.domain.order.model.document import document_to_order
from orderindex.domain.order.model.value import OrderStatus
from orderindex.domain.search.model.value import (
    DateRange,
    OrderSearchFilter,
    PaginatedResult,
    Pagination,
    paginate,
)
from orderindex.domain.search.util.query import (
    RECENCY_SORT,
    Query,
    build_order_query,
    match_all,
)
from orderindex.domain.shared.error import OrderIndexError, SearchQueryError, ValidationError
from orderindex.domain.shared.port.search_index import (
    IndexSettings,
    SearchHit,
    SearchIndexClient,
    SearchResponse,
)
from orderindex.domain.shared.service import Service
from orderindex.domain.shared.timeout import bounded

logger = logging.getLogger(__name__)


class OrderQueryService(Service):
    """Read side of the order index.

    Not-found is never an error: single lookups return None and list reads
    return an empty page, including pages past the index's result window.
    Every index failure surfaces as SearchQueryError carrying the operation
    name and the query that failed, as does a stored document that no
    longer maps back to an Order.
    """

    index: SearchIndexClient
    settings: IndexSettings

    async def find_one_by_uuid(self, uuid: UUID) -> Order | None:
        query: Query = {"term": {"uuid": str(uuid)}}
        response = await self._search("find_one_by_uuid", query, size=1, entity_id=str(uuid))
        if not response.hits:
            return None
        return self._to_order("find_one_by_uuid", response.hits[0])

    find_by_uuid = find_one_by_uuid

    async def find_all(self, pagination: Pagination | None = None) -> PaginatedResult[Order]:
        return await self._page("find_all", match_all(), pagination)

    async def find_by_customer(
        self, customer_id: str, pagination: Pagination | None = None
    ) -> PaginatedResult[Order]:
        if not customer_id:
            raise ValidationError("customer_id must not be empty", field="customer_id")
        return await self._page(
            "find_by_customer",
            build_order_query(OrderSearchFilter(customer_id=customer_id)),
            pagination,
        )

    async def find_by_status(
        self, status: OrderStatus | str, pagination: Pagination | None = None
    ) -> PaginatedResult[Order]:
        try:
            status = OrderStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown order status '{status}'", field="status") from e
        return await self._page(
            "find_by_status", build_order_query(OrderSearchFilter(status=status)), pagination
        )

    async def find_by_date_range(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        pagination: Pagination | None = None,
    ) -> PaginatedResult[Order]:
        if start is None and end is None:
            raise ValidationError("At least one of start or end is required", field="start")
        if start is not None and end is not None and start > end:
            raise ValidationError("start must not be after end", field="end")
        criteria = OrderSearchFilter(created=DateRange(start=start, end=end))
        return await self._page("find_by_date_range", build_order_query(criteria), pagination)

    async def find_by_product_id(
        self, product_id: str, pagination: Pagination | None = None
    ) -> PaginatedResult[Order]:
        if not product_id:
            raise ValidationError("product_id must not be empty", field="product_id")
        criteria = OrderSearchFilter(product_ids=[product_id])
        return await self._page("find_by_product_id", build_order_query(criteria), pagination)

    async def find_by_product_name(
        self, text: str, pagination: Pagination | None = None
    ) -> PaginatedResult[Order]:
        if not text or not text.strip():
            raise ValidationError("Search text must not be empty", field="text")
        criteria = OrderSearchFilter(product_text=text.strip())
        return await self._page("find_by_product_name", build_order_query(criteria), pagination)

    async def search(
        self, criteria: OrderSearchFilter, pagination: Pagination | None = None
    ) -> PaginatedResult[Order]:
        return await self._page("search", build_order_query(criteria), pagination)

    async def _page(
        self, operation: str, query: Query, pagination: Pagination | None
    ) -> PaginatedResult[Order]:
        pagination = pagination or Pagination()
        window = self.settings.max_result_window
        if pagination.offset >= window:
            # The index refuses to page this deep; count matches to fill in the totals
            logger.debug(f"Search '{operation}' page {pagination.page} is past the result window")
            response = await self._search(operation, query, size=0)
            return paginate([], response.total, pagination)

        response = await self._search(
            operation,
            query,
            from_=pagination.offset,
            size=min(pagination.size, window - pagination.offset),
            sort=RECENCY_SORT,
        )
        orders = [self._to_order(operation, hit) for hit in response.hits]
        return paginate(orders, response.total, pagination)

    def _to_order(self, operation: str, hit: SearchHit) -> Order:
        try:
            return document_to_order(hit.source)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error(f"Search '{operation}' read malformed document {hit.id}: {e!r}")
            raise SearchQueryError(
                operation,
                f"Malformed document {hit.id}: {e!r}",
                entity_id=hit.id,
                details={"cause": "document"},
            ) from e

    async def _search(
        self,
        operation: str,
        query: Query,
        from_: int = 0,
        size: int = 10,
        sort: list[dict[str, Any]] | None = None,
        entity_id: str | None = None,
    ) -> SearchResponse:
        try:
            return await bounded(
                self.index.search(self.settings.index, query, from_=from_, size=size, sort=sort),
                self.settings.timeout,
                "search",
            )
        except OrderIndexError as e:
            logger.error(f"Search '{operation}' failed: {e.message}")
            raise SearchQueryError(
                operation,
                e.message,
                entity_id=entity_id,
                details={"query": query, "cause": e.kind.value},
            ) from e
