"""Configuration for the Elasticsearch order index."""

from typing import Literal

from pydantic import BaseModel, Field

from orderindex.domain.shared.port.search_index import IndexSettings


class ElasticsearchConfig(BaseModel):
    """Elasticsearch connection and index settings.

    Env override example: ORDERINDEX_ELASTICSEARCH__HOSTS='["http://es:9200"]'
    """

    hosts: list[str] = ["http://localhost:9200"]
    api_key: str | None = None
    index: str = "orders"
    timeout: float = Field(default=5.0, gt=0)  # Seconds per index call
    # "wait_for" makes writes visible to the next search
    refresh: bool | Literal["wait_for"] = "wait_for"
    # Must match the index setting index.max_result_window
    max_result_window: int = Field(default=10000, gt=0)
    create_index: bool = True  # Create the index with mappings on startup

    @property
    def settings(self) -> IndexSettings:
        return IndexSettings(
            index=self.index,
            timeout=self.timeout,
            max_result_window=self.max_result_window,
        )
