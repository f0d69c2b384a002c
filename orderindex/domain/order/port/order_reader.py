"""OrderReader port - read access to the primary store."""

from typing import Protocol
from uuid import UUID

from orderindex.domain.order.model.aggregate import Order


class OrderReader(Protocol):
    """Reads the current committed state of an order."""

    async def get_order(self, order_id: UUID) -> Order | None:
        """Return the order, or None if it no longer exists."""
        ...
