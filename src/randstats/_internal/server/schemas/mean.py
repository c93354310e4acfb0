from typing import List

from pydantic import BaseModel

from randstats._internal.core.models.jobs import AggregationResult


class MeanResponse(BaseModel):
    numbers: List[List[int]]
    stddevs: List[float]
    # Holds the standard deviation of the sequence sums.
    # The name is kept for compatibility with existing clients.
    stddevofstddevs: float

    @classmethod
    def from_result(cls, result: AggregationResult) -> "MeanResponse":
        return cls(
            numbers=result.sequences,
            stddevs=result.std_devs,
            stddevofstddevs=result.std_dev_of_sums,
        )
