"""Order domain events."""

from orderindex.domain.order.event.events import (
    OrderCanceled,
    OrderCreated,
    OrderDeleted,
    OrderEvents,
    OrderUpdated,
)

__all__ = ["OrderCanceled", "OrderCreated", "OrderDeleted", "OrderEvents", "OrderUpdated"]
