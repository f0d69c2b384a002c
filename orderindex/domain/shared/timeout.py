"""Bounded waits for index calls."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from orderindex.domain.shared.error import IndexConnectionError

T = TypeVar("T")


async def bounded(call: Awaitable[T], timeout: float, operation: str) -> T:
    """Await an index call, turning an expired deadline into IndexConnectionError."""
    try:
        async with asyncio.timeout(timeout):
            return await call
    except TimeoutError as e:
        raise IndexConnectionError(
            f"Index {operation} timed out after {timeout}s",
            code="INDEX_TIMEOUT",
            details={"operation": operation, "timeout": timeout},
        ) from e
