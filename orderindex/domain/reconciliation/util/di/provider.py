from dishka import provide

from orderindex.domain.reconciliation.schedule import ReconciliationSweep
from orderindex.domain.reconciliation.service.ledger import ReconciliationLedger
from orderindex.domain.reconciliation.service.reconciliation import ReconciliationService
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope


class ReconciliationProvider(Provider):
    ledger = provide(ReconciliationLedger, scope=Scope.UOW)
    service = provide(ReconciliationService, scope=Scope.UOW)
    sweep = provide(ReconciliationSweep, scope=Scope.UOW)
