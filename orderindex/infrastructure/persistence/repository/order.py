"""SQLAlchemy adapter implementing OrderReader."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orderindex.domain.order.model.aggregate import Order
from orderindex.domain.order.port.order_reader import OrderReader
from orderindex.infrastructure.persistence.mappers.order import row_to_order
from orderindex.infrastructure.persistence.tables import order_items_table, orders_table


class SQLAlchemyOrderReader(OrderReader):
    """Reads committed orders from the primary store tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_order(self, order_id: UUID) -> Order | None:
        stmt = select(orders_table).where(orders_table.c.uuid == str(order_id))
        result = await self._session.execute(stmt)
        row = result.mappings().first()

        if row is None:
            return None

        items_stmt = (
            select(order_items_table)
            .where(order_items_table.c.order_uuid == str(order_id))
            .order_by(order_items_table.c.position, order_items_table.c.uuid)
        )
        item_rows = (await self._session.execute(items_stmt)).mappings().all()

        return row_to_order(dict(row), [dict(item) for item in item_rows])
