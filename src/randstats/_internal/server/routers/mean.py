from typing import Optional

from fastapi import APIRouter, Depends
from typing_extensions import Annotated

from randstats._internal.server.deps import get_aggregator
from randstats._internal.server.schemas.mean import MeanResponse
from randstats._internal.server.services.aggregator import Aggregator, parse_job_params
from randstats._internal.server.utils.routers import CustomORJSONResponse

router = APIRouter(tags=["mean"])


@router.get(
    "/",
    response_model=MeanResponse,
    response_class=CustomORJSONResponse,
    responses={500: {"description": "Invalid parameter", "content": {"text/plain": {}}}},
)
async def get_mean(
    aggregator: Annotated[Aggregator, Depends(get_aggregator)],
    requests: Optional[str] = None,
    length: Optional[str] = None,
) -> CustomORJSONResponse:
    """
    Requests `requests` random integer sequences of `length` numbers each and returns them
    with the standard deviation of every sequence and of the sequence sums.
    Fetches that fail leave an empty sequence with a zero standard deviation.
    """
    job = parse_job_params(requests=requests, length=length)
    result = await aggregator.run(job)
    return CustomORJSONResponse(MeanResponse.from_result(result).model_dump())
