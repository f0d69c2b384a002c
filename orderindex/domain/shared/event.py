"""Domain events, event handlers and scheduled tasks."""

from abc import ABC, ABCMeta, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import (
    Any,
    ClassVar,
    Generic,
    NewType,
    TypeVar,
    dataclass_transform,
    get_args,
    get_origin,
)
from uuid import UUID

from pydantic import Field

from orderindex.domain.shared.model.entity import Entity

EventId = NewType("EventId", UUID)

E = TypeVar("E", bound="Event")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Event(Entity):
    """Base class for domain events.

    Subclasses are automatically registered by name in Event._registry.
    """

    id: EventId
    created_at: datetime = Field(default_factory=_utc_now)

    # Auto-populated registry of all Event subclasses
    _registry: ClassVar[dict[str, type["Event"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry[cls.__name__] = cls

    @property
    def ordering_key(self) -> str:
        """Key that serializes delivery: events sharing a key are handled in order.

        Defaults to the event id (no ordering constraint). Entity events
        override this with the entity identity.
        """
        return str(self.id)


# --- EventHandler ---


def _extract_event_type(cls: type) -> type["Event"] | None:
    """Extract the event type E from EventHandler[E] in class bases."""
    for base in getattr(cls, "__orig_bases__", []):
        origin = get_origin(base)
        origin_name = getattr(origin, "__name__", None)
        if origin is not None and origin_name == "EventHandler":
            args = get_args(base)
            if args and isinstance(args[0], type) and issubclass(args[0], Event):
                return args[0]
    return None


@dataclass_transform()
class _EventHandlerMeta(ABCMeta):
    """Metaclass that applies @dataclass and extracts __event_type__ from EventHandler[E]."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]) -> type:
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
            event_type = _extract_event_type(cls)
            if event_type is not None:
                cls.__event_type__ = event_type
        return cls


class EventHandler(Generic[E], metaclass=_EventHandlerMeta):
    """Base class for push-based event handlers.

    The dispatcher resolves a fresh handler instance from the DI container
    for every delivery, so subclasses are dataclasses whose fields are the
    handler's dependencies. The __event_type__ is extracted from the generic
    parameter.

    Example:
        class ProjectCreatedOrder(EventHandler[OrderCreated]):
            projector: OrderProjector

            async def handle(self, event: OrderCreated) -> None:
                await self.projector.project_order(event.order)
    """

    __event_type__: ClassVar[type[Event]]

    @abstractmethod
    async def handle(self, event: E) -> None:
        """Handle a single event."""
        ...


# --- Schedule ---


@dataclass
class Schedule(ABC):
    """Base class for scheduled tasks.

    Subclasses are dataclasses with DI-injected dependencies.
    The cron expression is provided via config, not on the class.
    """

    @abstractmethod
    async def run(self, **params: Any) -> Any:
        """Run the scheduled task with parameters from config."""
        ...
