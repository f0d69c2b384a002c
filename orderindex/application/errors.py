"""Render orderindex errors for callers outside the domain (CLI, logs, HTTP layers)."""

from typing import Any

from orderindex.domain.shared.error import (
    IndexRequestError,
    OrderIndexError,
    SearchQueryError,
    ValidationError,
)


def error_to_dict(error: OrderIndexError) -> dict[str, Any]:
    """Flatten an error into {kind, http_status, code, message, details}."""
    details = dict(error.details)
    match error:
        case SearchQueryError():
            details.setdefault("operation", error.operation)
            if error.entity_id is not None:
                details.setdefault("entity_id", error.entity_id)
        case ValidationError() if error.field is not None:
            details.setdefault("field", error.field)
        case IndexRequestError() if error.status is not None:
            details.setdefault("status", error.status)

    return {
        "kind": error.kind.value,
        "http_status": error.http_status,
        "code": error.code,
        "message": error.message,
        "details": details,
    }
