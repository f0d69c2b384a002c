"""Order domain value objects."""

from decimal import Decimal
from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"

    @property
    def is_final(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELED)


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    """Build a Decimal without binary float noise (19.99 stays 19.99)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
