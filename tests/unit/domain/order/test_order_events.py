"""Unit tests for order events and their handlers."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from orderindex.domain.order.event import (
    OrderCanceled,
    OrderCreated,
    OrderDeleted,
    OrderEvents,
    OrderUpdated,
)
from orderindex.domain.order.handler import (
    ProjectCanceledOrder,
    ProjectCreatedOrder,
    ProjectUpdatedOrder,
    RemoveDeletedOrder,
)
from orderindex.domain.order.service.projector import OrderProjector
from tests.fakes import make_order


class TestOrderEvents:
    def test_ordering_key_is_order_uuid(self):
        order = make_order()

        assert OrderEvents.created(order).ordering_key == str(order.uuid)
        assert OrderEvents.updated(order).ordering_key == str(order.uuid)
        assert OrderEvents.canceled(order).ordering_key == str(order.uuid)
        assert OrderEvents.deleted(order.uuid).ordering_key == str(order.uuid)

    def test_constructors_build_distinct_events(self):
        order = make_order()

        first = OrderEvents.created(order)
        second = OrderEvents.created(order)

        assert isinstance(first, OrderCreated)
        assert first.id != second.id


class TestHandlers:
    def test_event_types_come_from_generic_parameter(self):
        assert ProjectCreatedOrder.__event_type__ is OrderCreated
        assert ProjectUpdatedOrder.__event_type__ is OrderUpdated
        assert ProjectCanceledOrder.__event_type__ is OrderCanceled
        assert RemoveDeletedOrder.__event_type__ is OrderDeleted

    @pytest.mark.asyncio
    async def test_handlers_route_to_projector(self):
        projector = AsyncMock(spec=OrderProjector)
        order = make_order()
        order_id = uuid4()

        await ProjectCreatedOrder(projector=projector).handle(OrderEvents.created(order))
        await ProjectUpdatedOrder(projector=projector).handle(OrderEvents.updated(order))
        await ProjectCanceledOrder(projector=projector).handle(OrderEvents.canceled(order))
        await RemoveDeletedOrder(projector=projector).handle(OrderEvents.deleted(order_id))

        projector.project_order.assert_awaited_once_with(order)
        assert projector.update_projection.await_count == 2
        projector.remove_projection.assert_awaited_once_with(order_id)
