"""Per-entity asyncio locks shared across units of work."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class EntityLocks:
    """One asyncio.Lock per entity key, created on demand.

    Live projection and reconciliation replay both write an entity's index
    document. Holding the entity's lock across read-write-record keeps one
    from overwriting the other with an older snapshot. A key's lock is
    discarded once nothing holds or waits on it.

    Example:
        async with locks.hold(str(order.uuid)):
            await projector.write_document(order)
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]
