"""Dependency injection provider for reconciliation runtime."""

from dishka import AsyncContainer, provide

from orderindex.config import Config
from orderindex.infrastructure.reconciliation.runner import SweepRunner
from orderindex.infrastructure.reconciliation.scheduler import SweepScheduler
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope


class SweepProvider(Provider):
    """SweepRunner and SweepScheduler are APP-scoped singletons."""

    @provide(scope=Scope.APP)
    def get_sweep_runner(self, container: AsyncContainer, config: Config) -> SweepRunner:
        return SweepRunner(container, limit=config.reconciliation.limit)

    @provide(scope=Scope.APP)
    def get_sweep_scheduler(self, runner: SweepRunner, config: Config) -> SweepScheduler:
        return SweepScheduler(runner, config.reconciliation)
