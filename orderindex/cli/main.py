"""Main CLI application using Cyclopts."""

import cyclopts

from orderindex.cli.commands import index, reconcile, worker

app = cyclopts.App(
    name="orderindex",
    help="Order search index sync - projection, reconciliation and queries",
)

app.command(reconcile.app, name="reconcile")
app.command(index.app, name="index")
app.command(worker.app, name="worker")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
