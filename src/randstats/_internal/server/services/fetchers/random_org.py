import asyncio
from typing import List, Optional

import httpx
from pydantic import ValidationError

from randstats._internal.core.errors import UpstreamError
from randstats._internal.core.models.jobs import FetchRequest
from randstats._internal.server import settings
from randstats._internal.server.schemas.random_org import (
    GenerateIntegersParams,
    GenerateIntegersRequest,
    GenerateIntegersResponse,
)
from randstats._internal.server.services.fetchers.base import BaseSequenceFetcher
from randstats._internal.server.services.limiter import UpstreamLimiter
from randstats._internal.utils.logging import get_logger

logger = get_logger(__name__)


class RandomOrgFetcher(BaseSequenceFetcher):
    """
    Requests integer sequences from the random.org `generateIntegers` method.
    Every call goes through `limiter`; no retries are made.
    """

    def __init__(
        self,
        api_key: str,
        url: str = settings.RANDOM_ORG_URL,
        timeout: float = settings.UPSTREAM_TIMEOUT,
        limiter: Optional[UpstreamLimiter] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._limiter = limiter or UpstreamLimiter(settings.UPSTREAM_MAX_CONCURRENCY)
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def fetch(self, request: FetchRequest) -> List[int]:
        payload = self.get_payload(request)
        async with self._limiter.slot():
            try:
                # httpx timeouts apply per phase, the deadline bounds the whole call
                resp = await asyncio.wait_for(self._post(payload), timeout=self._timeout)
            except asyncio.TimeoutError:
                raise UpstreamError(f"Request to random.org timed out after {self._timeout}s")
            except httpx.TimeoutException as e:
                raise UpstreamError(f"Request to random.org timed out: {e!r}")
            except httpx.RequestError as e:
                raise UpstreamError(f"Error requesting random.org: {e!r}")
            result = self._parse_response(resp)
            self._limiter.defer(result.advisory_delay / 1000)

        logger.debug(
            "random.org returned %d integers, requests left: %s, bits left: %s",
            len(result.random.data),
            result.requests_left,
            result.bits_left,
        )
        data = result.random.data
        if len(data) != request.sequence_length:
            raise UpstreamError(
                f"random.org returned {len(data)} integers, expected {request.sequence_length}"
            )
        return data

    async def _post(self, payload: GenerateIntegersRequest) -> httpx.Response:
        return await self._http.post(
            self._url,
            content=payload.model_dump_json(by_alias=True),
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        await self._http.aclose()

    def get_payload(self, request: FetchRequest) -> GenerateIntegersRequest:
        return GenerateIntegersRequest(
            params=GenerateIntegersParams(
                api_key=self._api_key,
                n=request.sequence_length,
                min=settings.RANDOM_MIN,
                max=settings.RANDOM_MAX,
            ),
            id=settings.RANDOM_ORG_REQUEST_ID,
        )

    @staticmethod
    def _parse_response(resp: httpx.Response):
        if not resp.is_success:
            raise UpstreamError(
                f"random.org responded with status {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )
        try:
            parsed = GenerateIntegersResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise UpstreamError(f"Invalid response from random.org: {e}")
        if parsed.error is not None:
            raise UpstreamError(parsed.error.message)
        if parsed.result is None:
            raise UpstreamError("random.org response has neither result nor error")
        return parsed.result
