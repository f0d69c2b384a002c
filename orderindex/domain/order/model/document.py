"""Order search document - the denormalized shape stored in the index.

Documents use camelCase keys and are stored under id = str(order.uuid).
Timestamps are ISO-8601 strings with offset. Amounts are stored twice: as
floats for range queries and sorting, and as exact decimal strings
(``totalExact``, ``priceExact``, ``subtotalExact``) that are not indexed.
Reads prefer the exact copy; a document without it is rebuilt from the
float through str(), which holds for up to 15 significant digits.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from orderindex.domain.order.model.aggregate import Order, OrderItem
from orderindex.domain.order.model.value import OrderStatus, to_decimal

OrderDocument = dict[str, Any]

# Stored in _source only
EXACT_AMOUNT: dict[str, Any] = {"type": "keyword", "index": False, "doc_values": False}

ORDER_INDEX_MAPPINGS: dict[str, Any] = {
    "properties": {
        "uuid": {"type": "keyword"},
        "customerId": {"type": "keyword"},
        "status": {"type": "keyword"},
        "total": {"type": "float"},
        "totalExact": EXACT_AMOUNT,
        "createdAt": {"type": "date"},
        "updatedAt": {"type": "date"},
        "items": {
            "type": "nested",
            "properties": {
                "uuid": {"type": "keyword"},
                "productId": {"type": "keyword"},
                "productName": {
                    "type": "text",
                    "fields": {"keyword": {"type": "keyword", "ignore_above": 256}},
                },
                "price": {"type": "float"},
                "quantity": {"type": "integer"},
                "subtotal": {"type": "float"},
                "priceExact": EXACT_AMOUNT,
                "subtotalExact": EXACT_AMOUNT,
            },
        },
    }
}


def document_id(order_id: UUID | str) -> str:
    return str(order_id)


def order_to_document(order: Order) -> OrderDocument:
    """Convert Order aggregate to its search document."""
    return {
        "uuid": str(order.uuid),
        "customerId": order.customer_id,
        "status": order.status.value,
        "total": float(order.total),
        "totalExact": str(order.total),
        "createdAt": order.created_at.isoformat(),
        "updatedAt": order.updated_at.isoformat(),
        "items": [_item_to_document(item) for item in order.items],
    }


def _item_to_document(item: OrderItem) -> dict[str, Any]:
    return {
        "uuid": str(item.uuid),
        "productId": item.product_id,
        "productName": item.product_name,
        "price": float(item.price),
        "quantity": item.quantity,
        "subtotal": float(item.subtotal),
        "priceExact": str(item.price),
        "subtotalExact": str(item.subtotal),
    }


def document_to_order(doc: OrderDocument) -> Order:
    """Convert a search document back to an Order aggregate."""
    items = doc.get("items") or []
    return Order(
        uuid=UUID(doc["uuid"]),
        customer_id=doc["customerId"],
        status=OrderStatus(doc["status"]),
        total=_amount(doc, "total"),
        created_at=datetime.fromisoformat(doc["createdAt"]),
        updated_at=datetime.fromisoformat(doc["updatedAt"]),
        items=[_document_to_item(item) for item in items],
    )


def _document_to_item(item: dict[str, Any]) -> OrderItem:
    return OrderItem(
        uuid=UUID(item["uuid"]),
        product_id=item["productId"],
        product_name=item["productName"],
        price=_amount(item, "price"),
        quantity=int(item["quantity"]),
        subtotal=_amount(item, "subtotal"),
    )


def _amount(doc: dict[str, Any], field: str) -> Decimal:
    exact = doc.get(f"{field}Exact")
    return to_decimal(exact if exact is not None else doc[field])
