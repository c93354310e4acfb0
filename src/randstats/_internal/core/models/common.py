from pydantic import BaseModel, ConfigDict


# Models are immutable so that they can be safely shared by coroutines
# without copying on every read operation.
class ImmutableModel(BaseModel):
    model_config = ConfigDict(frozen=True)
