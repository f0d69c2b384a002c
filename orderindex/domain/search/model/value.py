"""Search value objects: pagination and order filters."""

import math
from datetime import datetime
from decimal import Decimal
from typing import Generic, Self, TypeVar
from uuid import UUID

from pydantic import Field, model_validator

from orderindex.domain.order.model.value import OrderStatus
from orderindex.domain.shared.error import ValidationError
from orderindex.domain.shared.model.value import ValueObject

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class Pagination(ValueObject, frozen=True):
    """1-based page window over a result set."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @classmethod
    def of(cls, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Self:
        """Build a Pagination, raising ValidationError for out-of-range input."""
        if page < 1:
            raise ValidationError(f"page must be >= 1, got {page}", field="page")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}", field="limit"
            )
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def size(self) -> int:
        return self.limit


class PaginatedResult(ValueObject, Generic[T]):
    """One page of results plus totals for the whole result set."""

    data: list[T]
    total: int
    page: int
    limit: int
    pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


def paginate(items: list[T], total: int, pagination: Pagination) -> PaginatedResult[T]:
    pages = math.ceil(total / pagination.limit) if total else 0
    return PaginatedResult(
        data=items,
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        pages=pages,
    )


class DateRange(ValueObject, frozen=True):
    """Inclusive creation-time window. Either bound may be open."""

    start: datetime | None = None
    end: datetime | None = None

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(f"start {self.start.isoformat()} is after end {self.end.isoformat()}")
        return self

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


class OrderSearchFilter(ValueObject, frozen=True):
    """Criteria for order searches. Unset fields do not filter."""

    uuid: UUID | None = None
    customer_id: str | None = None
    status: OrderStatus | None = None
    statuses: list[OrderStatus] | None = None
    product_ids: list[str] | None = None
    product_text: str | None = None
    created: DateRange | None = None
    total_min: Decimal | None = None
    total_max: Decimal | None = None

    @model_validator(mode="after")
    def _check_total_bounds(self) -> Self:
        if (
            self.total_min is not None
            and self.total_max is not None
            and self.total_min > self.total_max
        ):
            raise ValueError(
                f"total_min {self.total_min} is greater than total_max {self.total_max}"
            )
        return self
