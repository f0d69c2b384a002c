"""Custom Dishka scopes for orderindex."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (engine, index client, dispatcher, sweep runner)
    - UOW: Unit of Work (one event delivery, one sweep, one CLI command)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
