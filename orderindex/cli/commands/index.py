"""Order index commands: create the mapping and read documents back."""

import asyncio
import sys
from uuid import UUID

import cyclopts

from orderindex.application.errors import error_to_dict
from orderindex.application.runtime import ensure_order_index
from orderindex.cli.console import get_console
from orderindex.cli.context import open_container
from orderindex.domain.search.model.value import Pagination
from orderindex.domain.search.service.search import OrderQueryService
from orderindex.domain.shared.error import OrderIndexError
from orderindex.domain.shared.port.search_index import IndexSettings, SearchIndexClient

app = cyclopts.App(name="index", help="Manage and query the order index")


@app.command
def init() -> None:
    """Create the order index with its mappings if it does not exist."""
    console = get_console()

    async def _init() -> tuple[bool, str]:
        async with open_container() as container:
            settings = await container.get(IndexSettings)
            index = await container.get(SearchIndexClient)
            return await ensure_order_index(index, settings), settings.index

    try:
        created, name = asyncio.run(_init())
    except OrderIndexError as e:
        console.error(e.message, hint=f"code={e.code}")
        sys.exit(1)

    if created:
        console.success(f"Created index '{name}'")
    else:
        console.info(f"Index '{name}' already exists")


@app.command
def show(order_id: UUID, /) -> None:
    """Show the indexed document for an order.

    Args:
        order_id: Order UUID.
    """
    console = get_console()

    async def _show():
        async with open_container() as container:
            queries = await container.get(OrderQueryService)
            return await queries.find_one_by_uuid(order_id)

    try:
        order = asyncio.run(_show())
    except OrderIndexError as e:
        console.error(e.message, hint=str(error_to_dict(e)["details"]))
        sys.exit(1)

    if order is None:
        console.warning(f"Order {order_id} is not in the index")
        sys.exit(1)

    console.order_detail(order)


@app.command(name="list")
def list_orders(
    customer: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> None:
    """List indexed orders, newest first.

    Args:
        customer: Only orders for this customer id.
        page: Page number, starting at 1.
        limit: Orders per page (1-100).
    """
    console = get_console()

    async def _list():
        pagination = Pagination.of(page, limit)
        async with open_container() as container:
            queries = await container.get(OrderQueryService)
            if customer:
                return await queries.find_by_customer(customer, pagination)
            return await queries.find_all(pagination)

    try:
        result = asyncio.run(_list())
    except OrderIndexError as e:
        console.error(e.message, hint=f"code={e.code}")
        sys.exit(1)

    if not result.data:
        console.warning(f"No orders on page {result.page} ({result.total} total)")
        return

    console.table(
        [
            {
                "uuid": order.uuid,
                "customer": order.customer_id,
                "status": order.status,
                "total": order.total,
                "items": len(order.items),
                "created": order.created_at.isoformat(timespec="seconds"),
            }
            for order in result.data
        ],
        [
            ("uuid", "Order"),
            ("customer", "Customer"),
            ("status", "Status"),
            ("total", "Total"),
            ("items", "Items"),
            ("created", "Created"),
        ],
        title=f"Page {result.page}/{result.pages} ({result.total} orders)",
    )
