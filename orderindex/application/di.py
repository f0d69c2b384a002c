from dishka import AsyncContainer, from_context, make_async_container

from orderindex.config import Config
from orderindex.domain.order.util.di import OrderProvider
from orderindex.domain.reconciliation.util.di import ReconciliationProvider
from orderindex.infrastructure.event.di import EventProvider
from orderindex.infrastructure.index.di import IndexProvider
from orderindex.infrastructure.persistence.di import PersistenceProvider
from orderindex.infrastructure.reconciliation.di import SweepProvider
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        IndexProvider(),
        EventProvider(),
        OrderProvider(),
        ReconciliationProvider(),
        SweepProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
