from orderindex.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Base class for aggregate roots."""
