from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base class for domain entities: mutable, identified objects."""

    model_config = ConfigDict(validate_assignment=True)
