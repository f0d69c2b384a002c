"""In-process event dispatcher with per-entity ordering."""

import asyncio
import logging
from collections import deque
from typing import Any

from dishka import AsyncContainer

from orderindex.domain.shared.error import ConfigurationError
from orderindex.domain.shared.event import Event, EventHandler
from orderindex.domain.shared.port.event_bus import EventBus
from orderindex.util.di.scope import Scope

logger = logging.getLogger(__name__)


class OrderedEventDispatcher(EventBus):
    """Delivers events to handlers without blocking the publisher.

    Events are queued on a lane keyed by ``event.ordering_key``. Each lane is
    drained by its own task, one event at a time, so events for one entity
    are handled in emission order while different entities proceed
    concurrently. A lane's task exits once its queue is empty.

    Every delivery resolves a fresh handler inside its own UOW scope.
    Delivery is at-most-once and in-process: a failing handler is logged and
    the lane moves on.

    Example:
        dispatcher = OrderedEventDispatcher(container)
        dispatcher.subscribe(OrderCreated, ProjectCreatedOrder)
        dispatcher.publish(OrderEvents.created(order))
        await dispatcher.join()
    """

    def __init__(self, container: AsyncContainer | None = None) -> None:
        self._container = container
        self._handlers: dict[type[Event], type[EventHandler[Any]]] = {}
        self._lanes: dict[str, deque[Event]] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}

    def set_container(self, container: AsyncContainer) -> None:
        """Set the DI container for scoped handler resolution."""
        self._container = container

    def subscribe(self, event_type: type[Event], handler_type: type[EventHandler[Any]]) -> None:
        """Register the handler for an event type. One handler per event type."""
        existing = self._handlers.get(event_type)
        if existing is not None:
            raise ConfigurationError(
                f"{event_type.__name__} already handled by {existing.__name__}; "
                f"cannot also subscribe {handler_type.__name__}"
            )
        self._handlers[event_type] = handler_type
        logger.debug(f"Subscribed {handler_type.__name__} to {event_type.__name__}")

    def register(self, handler_type: type[EventHandler[Any]]) -> None:
        """Subscribe a handler to the event type of its generic parameter."""
        self.subscribe(handler_type.__event_type__, handler_type)

    @property
    def subscriptions(self) -> dict[type[Event], type[EventHandler[Any]]]:
        return dict(self._handlers)

    @property
    def pending(self) -> int:
        """Number of queued events not yet picked up by a lane."""
        return sum(len(lane) for lane in self._lanes.values())

    @property
    def active_lanes(self) -> int:
        return len(self._tasks)

    def publish(self, event: Event) -> None:
        """Enqueue an event and return immediately."""
        if type(event) not in self._handlers:
            logger.debug(f"No handler for event {type(event).__name__}, dropping")
            return
        if self._container is None:
            raise RuntimeError("Container not set. Call set_container() first.")

        key = event.ordering_key
        lane = self._lanes.get(key)
        if lane is None:
            lane = self._lanes[key] = deque()
        lane.append(event)

        if key not in self._tasks:
            self._tasks[key] = asyncio.create_task(self._drain(key), name=f"lane-{key}")

    async def join(self) -> None:
        """Wait until every lane has drained."""
        while self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    async def close(self) -> None:
        """Cancel in-flight lanes. Queued events are dropped."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        dropped = self.pending
        self._lanes.clear()
        self._tasks.clear()
        if dropped:
            logger.warning(f"Dispatcher closed with {dropped} undelivered events")

    async def _drain(self, key: str) -> None:
        lane = self._lanes[key]
        try:
            while lane:
                await self._deliver(lane.popleft())
        finally:
            # No await between the empty check and here, so no event is stranded
            if not lane:
                self._lanes.pop(key, None)
            self._tasks.pop(key, None)

    async def _deliver(self, event: Event) -> None:
        assert self._container is not None
        handler_type = self._handlers[type(event)]
        try:
            async with self._container(scope=Scope.UOW) as scope:
                handler = await scope.get(handler_type)
                await handler.handle(event)
        except Exception:
            logger.exception(
                f"Handler '{handler_type.__name__}' failed on {type(event).__name__} "
                f"(key={event.ordering_key}, id={event.id})"
            )
