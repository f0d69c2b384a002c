"""SearchIndexClient port - document store primitives used by projection and queries."""

from typing import Any, Protocol

from pydantic import BaseModel, Field

Document = dict[str, Any]


class SearchHit(BaseModel, frozen=True):
    """A single document returned by a search."""

    id: str
    source: Document


class SearchResponse(BaseModel, frozen=True):
    """Hits for the requested window plus the total number of matches."""

    hits: list[SearchHit]
    total: int


class SearchIndexClient(Protocol):
    """Protocol for the search index collaborator.

    Adapters raise IndexConnectionError when the index is unreachable and
    IndexRequestError when it rejects a request.
    """

    async def upsert(self, index: str, id: str, document: Document) -> None:
        """Create the document, or replace it entirely if it exists."""
        ...

    async def delete(self, index: str, id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        ...

    async def exists(self, index: str, id: str) -> bool:
        """Check whether a document exists."""
        ...

    async def search(
        self,
        index: str,
        query: dict[str, Any],
        from_: int = 0,
        size: int = 10,
        sort: list[dict[str, Any]] | None = None,
    ) -> SearchResponse:
        """Run a structured query and return one window of hits."""
        ...

    async def ensure_index(self, index: str, mappings: dict[str, Any]) -> bool:
        """Create the index with the given mappings if missing. Returns True if created."""
        ...


class IndexSettings(BaseModel, frozen=True):
    """Where and how long to talk to the index."""

    index: str = "orders"
    timeout: float = Field(default=5.0, gt=0)
    # Highest from + size the index serves (index.max_result_window)
    max_result_window: int = Field(default=10000, gt=0)
