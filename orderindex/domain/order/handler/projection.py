"""Handlers that keep the order index in step with the primary store."""

from orderindex.domain.order.event import (
    OrderCanceled,
    OrderCreated,
    OrderDeleted,
    OrderUpdated,
)
from orderindex.domain.order.service.projector import OrderProjector
from orderindex.domain.shared.event import EventHandler


class ProjectCreatedOrder(EventHandler[OrderCreated]):
    projector: OrderProjector

    async def handle(self, event: OrderCreated) -> None:
        await self.projector.project_order(event.order)


class ProjectUpdatedOrder(EventHandler[OrderUpdated]):
    projector: OrderProjector

    async def handle(self, event: OrderUpdated) -> None:
        await self.projector.update_projection(event.order)


class ProjectCanceledOrder(EventHandler[OrderCanceled]):
    """Canceled orders stay searchable; only their status changes."""

    projector: OrderProjector

    async def handle(self, event: OrderCanceled) -> None:
        await self.projector.update_projection(event.order)


class RemoveDeletedOrder(EventHandler[OrderDeleted]):
    projector: OrderProjector

    async def handle(self, event: OrderDeleted) -> None:
        await self.projector.remove_projection(event.order_id)
