from orderindex.domain.order.handler.projection import (
    ProjectCanceledOrder,
    ProjectCreatedOrder,
    ProjectUpdatedOrder,
    RemoveDeletedOrder,
)

__all__ = [
    "ProjectCanceledOrder",
    "ProjectCreatedOrder",
    "ProjectUpdatedOrder",
    "RemoveDeletedOrder",
]
