"""Order aggregate - read-only snapshot of the primary store's order."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from orderindex.domain.order.model.value import OrderStatus, to_decimal
from orderindex.domain.shared.error import ValidationError
from orderindex.domain.shared.model.aggregate import Aggregate
from orderindex.domain.shared.model.entity import Entity


class OrderItem(Entity):
    """A line of an order. subtotal must equal price * quantity."""

    uuid: UUID
    product_id: str
    product_name: str
    price: Decimal = Field(gt=0)
    quantity: int = Field(ge=1)
    subtotal: Decimal

    @classmethod
    def create(
        cls,
        product_id: str,
        product_name: str,
        price: Decimal | int | str,
        quantity: int,
        uuid: UUID | None = None,
    ) -> "OrderItem":
        """Build an item with its subtotal computed."""
        return cls(
            uuid=uuid or uuid4(),
            product_id=product_id,
            product_name=product_name,
            price=to_decimal(price),
            quantity=quantity,
            subtotal=to_decimal(price) * quantity,
        )


def calculate_order_total(items: list[OrderItem]) -> Decimal:
    """Sum of item subtotals."""
    return sum((item.subtotal for item in items), Decimal(0))


class Order(Aggregate):
    """Authoritative order state as committed by the primary store."""

    uuid: UUID
    customer_id: str
    status: OrderStatus = OrderStatus.PENDING
    total: Decimal
    created_at: datetime
    updated_at: datetime
    items: list[OrderItem] = []

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from the primary store are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def create(
        cls,
        customer_id: str,
        items: list[OrderItem],
        status: OrderStatus = OrderStatus.PENDING,
        uuid: UUID | None = None,
        created_at: datetime | None = None,
    ) -> "Order":
        """Build an order whose total is derived from its items."""
        now = created_at or datetime.now(UTC)
        return cls(
            uuid=uuid or uuid4(),
            customer_id=customer_id,
            status=status,
            total=calculate_order_total(items),
            created_at=now,
            updated_at=now,
            items=items,
        )

    def check_invariants(self) -> None:
        """Raise ValidationError unless subtotals and total are consistent."""
        for position, item in enumerate(self.items, start=1):
            expected = item.price * item.quantity
            if item.subtotal != expected:
                raise ValidationError(
                    f"Order {self.uuid} item #{position} subtotal {item.subtotal} "
                    f"!= price {item.price} x quantity {item.quantity}",
                    field=f"items[{position - 1}].subtotal",
                )

        expected_total = calculate_order_total(self.items)
        if self.total != expected_total:
            raise ValidationError(
                f"Order {self.uuid} total {self.total} != sum of subtotals {expected_total}",
                field="total",
            )
