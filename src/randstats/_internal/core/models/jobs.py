"""Entities created per aggregation job and discarded once the response is sent."""

from typing import Dict, List, Optional

from pydantic import Field, model_validator
from typing_extensions import Annotated

from randstats._internal.core.models.common import ImmutableModel
from randstats._internal import settings


class FetchRequest(ImmutableModel):
    sequence_length: Annotated[int, Field(ge=1, le=settings.MAX_SEQUENCE_LENGTH)]


class FetchResult(ImmutableModel):
    """
    The outcome of one upstream fetch: either a sequence or the reason it failed.
    Exactly one of `sequence` and `error` is set.
    """

    index: int
    sequence: Optional[List[int]] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_tagged(self) -> "FetchResult":
        if (self.sequence is None) == (self.error is None):
            raise ValueError("FetchResult must have either sequence or error")
        return self

    @classmethod
    def ok(cls, index: int, sequence: List[int]) -> "FetchResult":
        return cls(index=index, sequence=sequence)

    @classmethod
    def failed(cls, index: int, reason: str) -> "FetchResult":
        return cls(index=index, error=reason)

    @property
    def is_ok(self) -> bool:
        return self.sequence is not None


class AggregationJob(ImmutableModel):
    request_count: Annotated[int, Field(ge=1, le=settings.MAX_REQUESTS)]
    sequence_length: Annotated[int, Field(ge=1, le=settings.MAX_SEQUENCE_LENGTH)]


class AggregationResult(ImmutableModel):
    sequences: List[List[int]]
    std_devs: List[float]
    std_dev_of_sums: float
    # slot index -> failure reason; not part of the HTTP response
    failures: Dict[int, str] = {}

    @property
    def request_count(self) -> int:
        return len(self.sequences)
