"""
Fan-out aggregation: requests several random integer sequences concurrently
and derives dispersion statistics from them.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional

from randstats._internal import settings
from randstats._internal.core.errors import InvalidParameterError, UpstreamError
from randstats._internal.core.models.jobs import (
    AggregationJob,
    AggregationResult,
    FetchRequest,
    FetchResult,
)
from randstats._internal.server.services.fetchers.base import BaseSequenceFetcher
from randstats._internal.server.services.stats import (
    round_half_away,
    rounded_std_dev,
    sequence_sums,
    std_dev,
)
from randstats._internal.utils.logging import get_logger

logger = get_logger(__name__)

REQUESTS_PARAM = "requests"
LENGTH_PARAM = "length"

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_job_params(requests: Optional[str], length: Optional[str]) -> AggregationJob:
    """
    Builds a job from raw query string values. Missing or empty values default to 1.
    """
    return make_job(
        request_count=_parse_int_param(REQUESTS_PARAM, requests),
        sequence_length=_parse_int_param(LENGTH_PARAM, length),
    )


def make_job(request_count: Any, sequence_length: Any) -> AggregationJob:
    _validate_int_param(REQUESTS_PARAM, request_count, settings.MAX_REQUESTS)
    _validate_int_param(LENGTH_PARAM, sequence_length, settings.MAX_SEQUENCE_LENGTH)
    return AggregationJob(request_count=request_count, sequence_length=sequence_length)


def _parse_int_param(name: str, value: Optional[str]) -> int:
    if value is None or value == "":
        return 1
    if not _INT_RE.fullmatch(value):
        raise InvalidParameterError(name, "has to be an integer")
    try:
        return int(value)
    except ValueError:
        # digit strings beyond the interpreter conversion limit
        raise InvalidParameterError(name, "has to be an integer")


def _validate_int_param(name: str, value: Any, max_value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(name, "has to be an integer")
    if value <= 0:
        raise InvalidParameterError(name, "has to be greater than 0")
    if value > max_value:
        raise InvalidParameterError(name, f"has to be smaller than or equal to {max_value}")


class Aggregator:
    """
    Runs aggregation jobs against `fetcher`.

    Each job launches one task per requested sequence. The task for slot `i`
    is the only writer of `sequences[i]` and `std_devs[i]`, so results keep
    the launch order regardless of completion order. A failed fetch leaves
    its slot empty with a zero standard deviation and never fails the job.
    """

    def __init__(self, fetcher: BaseSequenceFetcher):
        self._fetcher = fetcher

    async def aggregate(self, request_count: Any, sequence_length: Any) -> AggregationResult:
        job = make_job(request_count=request_count, sequence_length=sequence_length)
        return await self.run(job)

    async def run(self, job: AggregationJob) -> AggregationResult:
        sequences: List[List[int]] = [[] for _ in range(job.request_count)]
        std_devs: List[float] = [0.0] * job.request_count
        request = FetchRequest(sequence_length=job.sequence_length)

        async def fill_slot(index: int) -> FetchResult:
            result = await self._fetch(index, request)
            if result.is_ok:
                sequences[index] = result.sequence
                std_devs[index] = rounded_std_dev(result.sequence)
            return result

        tasks = [asyncio.create_task(fill_slot(i)) for i in range(job.request_count)]
        # In-flight fetches are not cancelled if the caller goes away.
        results = await asyncio.shield(asyncio.gather(*tasks))

        failures: Dict[int, str] = {r.index: r.error for r in results if not r.is_ok}
        if failures:
            logger.warning(
                "%d of %d fetches failed, their slots are left empty",
                len(failures),
                job.request_count,
            )
        return AggregationResult(
            sequences=sequences,
            std_devs=std_devs,
            std_dev_of_sums=round_half_away(std_dev(sequence_sums(sequences))),
            failures=failures,
        )

    async def _fetch(self, index: int, request: FetchRequest) -> FetchResult:
        try:
            sequence = await self._fetcher.fetch(request)
        except UpstreamError as e:
            logger.warning("Fetch %d failed: %s", index, e)
            return FetchResult.failed(index, str(e))
        except Exception as e:
            logger.error("Got exception when fetching sequence %d", index, exc_info=e)
            return FetchResult.failed(index, repr(e))
        return FetchResult.ok(index, list(sequence))
