"""Order lifecycle events emitted by the primary store after commit."""

from uuid import UUID, uuid4

from orderindex.domain.order.model.aggregate import Order
from orderindex.domain.shared.event import Event, EventId


class OrderSnapshotEvent(Event):
    """An order mutation carrying the committed snapshot."""

    order: Order

    @property
    def ordering_key(self) -> str:
        return str(self.order.uuid)


class OrderCreated(OrderSnapshotEvent):
    """A new order was committed."""


class OrderUpdated(OrderSnapshotEvent):
    """An existing order was modified (items, status)."""


class OrderCanceled(OrderSnapshotEvent):
    """An order moved to the canceled status."""


class OrderDeleted(Event):
    """An order was hard-deleted from the primary store."""

    order_id: UUID

    @property
    def ordering_key(self) -> str:
        return str(self.order_id)


class OrderEvents:
    """Constructors used by the primary store at commit time."""

    @staticmethod
    def created(order: Order) -> OrderCreated:
        return OrderCreated(id=EventId(uuid4()), order=order)

    @staticmethod
    def updated(order: Order) -> OrderUpdated:
        return OrderUpdated(id=EventId(uuid4()), order=order)

    @staticmethod
    def canceled(order: Order) -> OrderCanceled:
        return OrderCanceled(id=EventId(uuid4()), order=order)

    @staticmethod
    def deleted(order_id: UUID) -> OrderDeleted:
        return OrderDeleted(id=EventId(uuid4()), order_id=order_id)
