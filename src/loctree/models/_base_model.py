from pydantic import BaseModel, ConfigDict


class LoctreeModel(BaseModel):
    """Base immutable model for loctree models.

    Uses [pydantic.BaseModel][].  Instances are frozen so that a single model can
    be shared by every node of a persistent tree.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_default=True,
        extra="forbid",
    )
