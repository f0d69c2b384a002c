from abc import abstractmethod
from typing import Protocol

from orderindex.domain.shared.event import Event


class EventBus(Protocol):
    """Commit-time event emission, called by the primary store after a mutation is durable."""

    @abstractmethod
    def publish(self, event: Event) -> None: ...
