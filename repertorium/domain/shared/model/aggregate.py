from pydantic import BaseModel, ConfigDict


class Aggregate(BaseModel):
    """Base class for aggregate roots. Mutations go through explicit methods."""

    model_config = ConfigDict(validate_assignment=True)
