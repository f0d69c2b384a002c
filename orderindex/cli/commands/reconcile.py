"""Operator commands for the reconciliation ledger."""

import asyncio

import cyclopts

from orderindex.cli.console import get_console
from orderindex.cli.context import open_container
from orderindex.domain.reconciliation.service.ledger import ReconciliationLedger
from orderindex.infrastructure.reconciliation.runner import SweepRunner
from orderindex.util.di.scope import Scope

app = cyclopts.App(name="reconcile", help="Inspect and replay failed index operations")


@app.command
def run() -> None:
    """Run one reconciliation sweep and print the counts."""
    console = get_console()

    async def _run():
        async with open_container() as container:
            runner = await container.get(SweepRunner)
            return await runner.sweep()

    with console.status("Replaying failed operations..."):
        result = asyncio.run(_run())

    console.success(
        f"Resolved {result.resolved}, dropped {result.dropped}, {result.remaining} remaining"
    )
    if result.remaining:
        console.info("Remaining records are retried on the next sweep")


@app.command
def pending(limit: int = 50) -> None:
    """List outstanding reconciliation records, oldest first.

    Args:
        limit: Maximum number of records to show.
    """
    console = get_console()

    async def _pending():
        async with open_container() as container:
            async with container(scope=Scope.UOW) as scope:
                ledger = await scope.get(ReconciliationLedger)
                return await ledger.outstanding(limit=limit), await ledger.count()

    records, total = asyncio.run(_pending())

    if not records:
        console.success("No outstanding reconciliation records")
        return

    console.table(
        [
            {
                "kind": record.operation_kind,
                "entity": record.entity_id,
                "attempts": record.attempt_count,
                "first": record.first_failed_at.isoformat(timespec="seconds"),
                "last": record.last_failed_at.isoformat(timespec="seconds"),
                "error": record.error_message,
            }
            for record in records
        ],
        [
            ("kind", "Kind"),
            ("entity", "Order"),
            ("attempts", "Attempts"),
            ("first", "First failed"),
            ("last", "Last failed"),
            ("error", "Error"),
        ],
        title=f"{total} outstanding",
    )
