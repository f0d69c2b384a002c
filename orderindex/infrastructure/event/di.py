"""Dependency injection provider for the event system."""

import logging
from typing import Any, AsyncIterable, NewType

from dishka import AsyncContainer, provide

from orderindex.domain.order.handler import (
    ProjectCanceledOrder,
    ProjectCreatedOrder,
    ProjectUpdatedOrder,
    RemoveDeletedOrder,
)
from orderindex.domain.shared.event import EventHandler
from orderindex.domain.shared.port.event_bus import EventBus
from orderindex.infrastructure.event.dispatcher import OrderedEventDispatcher
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope

logger = logging.getLogger(__name__)


HandlerTypes = NewType("HandlerTypes", list[type[EventHandler[Any]]])

# All event handlers, subscribed to the dispatcher by their event type
HANDLERS: HandlerTypes = HandlerTypes(
    [
        ProjectCreatedOrder,
        ProjectUpdatedOrder,
        ProjectCanceledOrder,
        RemoveDeletedOrder,
    ]
)


class EventProvider(Provider):
    """Provides event system components.

    Handlers are UOW-scoped (fresh per delivery). The dispatcher is an
    APP-scoped singleton.
    """

    # UOW-scoped providers for handlers
    for _handler_type in HANDLERS:
        locals()[_handler_type.__name__] = provide(_handler_type, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_handler_types(self) -> HandlerTypes:
        return HANDLERS

    @provide(scope=Scope.APP)
    async def get_dispatcher(
        self,
        container: AsyncContainer,
        handler_types: HandlerTypes,
    ) -> AsyncIterable[OrderedEventDispatcher]:
        dispatcher = OrderedEventDispatcher(container)
        for handler_type in handler_types:
            dispatcher.register(handler_type)
        logger.info(f"Dispatcher created with {len(handler_types)} handlers")
        yield dispatcher
        await dispatcher.close()

    @provide(scope=Scope.APP)
    def get_event_bus(self, dispatcher: OrderedEventDispatcher) -> EventBus:
        return dispatcher
