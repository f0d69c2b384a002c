"""Order mapper - converts primary store rows to the Order aggregate."""

from datetime import datetime
from typing import Any
from uuid import UUID

from orderindex.domain.order.model.aggregate import Order, OrderItem
from orderindex.domain.order.model.value import OrderStatus, to_decimal


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def row_to_item(row: dict[str, Any]) -> OrderItem:
    return OrderItem(
        uuid=UUID(row["uuid"]),
        product_id=row["product_id"],
        product_name=row["product_name"],
        price=to_decimal(row["price"]),
        quantity=int(row["quantity"]),
        subtotal=to_decimal(row["subtotal"]),
    )


def row_to_order(row: dict[str, Any], item_rows: list[dict[str, Any]]) -> Order:
    """Convert an orders row and its order_items rows to an Order aggregate."""
    return Order(
        uuid=UUID(row["uuid"]),
        customer_id=row["customer_id"],
        status=OrderStatus(row["status"]),
        total=to_decimal(row["total"]),
        created_at=_as_datetime(row["created_at"]),
        updated_at=_as_datetime(row["updated_at"]),
        items=[row_to_item(item) for item in item_rows],
    )
