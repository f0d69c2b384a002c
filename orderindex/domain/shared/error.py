"""Error taxonomy for orderindex.

Every error carries a fixed ``kind`` from a closed set, an HTTP status hint,
a machine-readable ``code``, a message and optional ``details``. Callers
branch on ``error.kind`` rather than on the class hierarchy:

    match error.kind:
        case ErrorKind.CONNECTION | ErrorKind.INDEX_REQUEST:
            ...

Write-path errors (CONNECTION, INDEX_REQUEST) are recorded to the
reconciliation ledger. Read-path errors are surfaced as SEARCH_QUERY.
"""

from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    CONNECTION = "connection"
    INDEX_REQUEST = "index_request"
    SEARCH_QUERY = "search_query"
    VALIDATION = "validation"
    REPLAY_NOT_FOUND = "replay_not_found"
    NOT_FOUND = "not_found"
    CONFIGURATION = "configuration"


class OrderIndexError(Exception):
    """Base class for all orderindex errors."""

    kind: ClassVar[ErrorKind]
    http_status: ClassVar[int] = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)


class IndexConnectionError(OrderIndexError):
    """Search index unreachable, or the call timed out."""

    kind = ErrorKind.CONNECTION
    http_status = 503


class IndexRequestError(OrderIndexError):
    """Search index reachable but rejected the request."""

    kind = ErrorKind.INDEX_REQUEST
    http_status = 502

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.status = status


class SearchQueryError(OrderIndexError):
    """A read against the index failed.

    Carries the operation name and, when the read targets a single order,
    the entity id.
    """

    kind = ErrorKind.SEARCH_QUERY
    http_status = 500

    def __init__(
        self,
        operation: str,
        message: str,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Search '{operation}' failed: {message}",
            code="SEARCH_FAILED",
            details=details,
        )
        self.operation = operation
        self.entity_id = entity_id


class ValidationError(OrderIndexError):
    """Input or document invariants failed."""

    kind = ErrorKind.VALIDATION
    http_status = 422

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class ReplayNotFoundError(OrderIndexError):
    """The entity behind a reconciliation record no longer exists in the primary store."""

    kind = ErrorKind.REPLAY_NOT_FOUND
    http_status = 404


class NotFoundError(OrderIndexError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND
    http_status = 404


class ConfigurationError(OrderIndexError):
    """System misconfiguration detected."""

    kind = ErrorKind.CONFIGURATION
    http_status = 500
