"""Global test fixtures."""

import pytest

from orderindex.domain.order.service.projector import OrderProjector
from orderindex.domain.reconciliation.service.ledger import ReconciliationLedger
from orderindex.domain.reconciliation.service.reconciliation import ReconciliationService
from orderindex.domain.search.service.search import OrderQueryService
from orderindex.domain.shared.lock import EntityLocks
from orderindex.domain.shared.port.search_index import IndexSettings
from tests.fakes import FakeOrderReader, InMemoryIndexClient, InMemoryReconciliationRepository


@pytest.fixture
def index() -> InMemoryIndexClient:
    return InMemoryIndexClient()


@pytest.fixture
def settings() -> IndexSettings:
    return IndexSettings(index="orders", timeout=1.0)


@pytest.fixture
def ledger_repo() -> InMemoryReconciliationRepository:
    return InMemoryReconciliationRepository()


@pytest.fixture
def ledger(ledger_repo: InMemoryReconciliationRepository) -> ReconciliationLedger:
    return ReconciliationLedger(repo=ledger_repo)


@pytest.fixture
def locks() -> EntityLocks:
    return EntityLocks()


@pytest.fixture
def projector(
    index: InMemoryIndexClient,
    ledger: ReconciliationLedger,
    settings: IndexSettings,
    locks: EntityLocks,
) -> OrderProjector:
    return OrderProjector(index=index, ledger=ledger, settings=settings, locks=locks)


@pytest.fixture
def orders() -> FakeOrderReader:
    return FakeOrderReader()


@pytest.fixture
def reconciliation(
    ledger: ReconciliationLedger, projector: OrderProjector, orders: FakeOrderReader
) -> ReconciliationService:
    return ReconciliationService(ledger=ledger, projector=projector, orders=orders)


@pytest.fixture
def queries(index: InMemoryIndexClient, settings: IndexSettings) -> OrderQueryService:
    return OrderQueryService(index=index, settings=settings)
