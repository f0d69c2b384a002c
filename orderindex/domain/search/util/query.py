"""Query DSL builders for the order index.

Exact filters use term/terms, free text uses multi_match, ranges are
inclusive (gte/lte) and item criteria are wrapped in a nested query on
``items``.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from orderindex.domain.search.model.value import OrderSearchFilter

Query = dict[str, Any]

RECENCY_SORT: list[dict[str, Any]] = [{"createdAt": {"order": "desc"}}]

PRODUCT_TEXT_FIELDS = ["items.productName^3"]


def match_all() -> Query:
    return {"match_all": {}}


def term(field: str, value: Any) -> Query:
    return {"term": {field: value}}


def terms(field: str, values: Iterable[Any]) -> Query:
    return {"terms": {field: list(values)}}


def match_text(query: str, fields: list[str], type: str | None = None) -> Query:
    body: dict[str, Any] = {"query": query, "fields": list(fields)}
    if type is not None:
        body["type"] = type
    return {"multi_match": body}


def date_range(field: str, gte: datetime | None = None, lte: datetime | None = None) -> Query:
    """Inclusive date range; only supplied bounds are emitted."""
    bounds: dict[str, str] = {}
    if gte is not None:
        bounds["gte"] = gte.isoformat()
    if lte is not None:
        bounds["lte"] = lte.isoformat()
    return {"range": {field: bounds}}


def numeric_range(
    field: str,
    gte: Decimal | float | None = None,
    lte: Decimal | float | None = None,
) -> Query:
    bounds: dict[str, float] = {}
    if gte is not None:
        bounds["gte"] = float(gte)
    if lte is not None:
        bounds["lte"] = float(lte)
    return {"range": {field: bounds}}


def nested(path: str, query: Query) -> Query:
    return {"nested": {"path": path, "query": query}}


def bool_filter(
    must: list[Query] | None = None,
    filter: list[Query] | None = None,
) -> Query:
    body: dict[str, list[Query]] = {}
    if must:
        body["must"] = must
    if filter:
        body["filter"] = filter
    return {"bool": body}


def build_order_query(criteria: OrderSearchFilter) -> Query:
    """Compose a query from a filter. An empty filter matches everything."""
    must: list[Query] = []
    filters: list[Query] = []

    if criteria.uuid is not None:
        filters.append(term("uuid", str(criteria.uuid)))
    if criteria.customer_id is not None:
        filters.append(term("customerId", criteria.customer_id))
    if criteria.status is not None:
        filters.append(term("status", criteria.status.value))
    if criteria.statuses:
        filters.append(terms("status", [s.value for s in criteria.statuses]))
    if criteria.product_ids:
        filters.append(nested("items", terms("items.productId", criteria.product_ids)))
    if criteria.product_text:
        must.append(nested("items", match_text(criteria.product_text, PRODUCT_TEXT_FIELDS)))
    if criteria.created is not None and not criteria.created.is_open:
        filters.append(date_range("createdAt", criteria.created.start, criteria.created.end))
    if criteria.total_min is not None or criteria.total_max is not None:
        filters.append(numeric_range("total", criteria.total_min, criteria.total_max))

    if not must and not filters:
        return match_all()
    return bool_filter(must=must, filter=filters)
