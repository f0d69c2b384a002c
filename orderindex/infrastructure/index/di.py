"""Dependency injection provider for the search index."""

from typing import AsyncIterable

from dishka import provide

from orderindex.config import Config
from orderindex.domain.shared.port.search_index import IndexSettings, SearchIndexClient
from orderindex.infrastructure.index.elasticsearch.client import ElasticsearchIndexClient
from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope


class IndexProvider(Provider):
    """Provides the Elasticsearch client and index settings."""

    @provide(scope=Scope.APP)
    async def get_index_client(self, config: Config) -> AsyncIterable[SearchIndexClient]:
        client = ElasticsearchIndexClient.from_config(config.elasticsearch)
        yield client
        await client.close()

    @provide(scope=Scope.APP)
    def get_index_settings(self, config: Config) -> IndexSettings:
        return config.elasticsearch.settings
