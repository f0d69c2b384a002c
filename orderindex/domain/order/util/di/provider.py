from dishka import provide

from orderindex.domain.order.service.projector import OrderProjector
from orderindex.domain.search.service.search import OrderQueryService
from orderindex.domain.shared.lock import EntityLocks
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope


class OrderProvider(Provider):
    # One lock map per process, shared by live projection and replay
    locks = provide(EntityLocks, scope=Scope.APP)
    # Projector records failures through the UOW-scoped ledger
    projector = provide(OrderProjector, scope=Scope.UOW)
    query_service = provide(OrderQueryService, scope=Scope.APP)
