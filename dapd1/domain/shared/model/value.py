from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable model compared by value; catalog rows are read back as these."""

    model_config = ConfigDict(frozen=True)
