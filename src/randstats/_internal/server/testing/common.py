import asyncio
from typing import Dict, List, Optional, Sequence

import httpx
from fastapi import FastAPI

from randstats._internal.core.errors import UpstreamError
from randstats._internal.core.models.jobs import FetchRequest
from randstats._internal.server.app import register_routes
from randstats._internal.server.deps import DependencyInjector
from randstats._internal.server.services.fetchers.base import BaseSequenceFetcher


class ScriptedFetcher(BaseSequenceFetcher):
    """
    Returns predefined outcomes in call order. Each outcome is either a sequence or
    an exception to raise. An optional per-call delay lets calls finish out of order.
    Without a script, returns `1, 2, ..., n` for every call.
    """

    def __init__(
        self,
        outcomes: Optional[Sequence[object]] = None,
        delays: Optional[Sequence[float]] = None,
    ) -> None:
        self._outcomes = list(outcomes) if outcomes is not None else None
        self._delays = list(delays) if delays is not None else None
        self.calls = 0
        self.requests: List[FetchRequest] = []
        self.completion_order: List[int] = []
        self.closed = False

    async def fetch(self, request: FetchRequest) -> List[int]:
        call = self.calls
        self.calls += 1
        self.requests.append(request)
        if self._delays is not None:
            await asyncio.sleep(self._delays[call])
        self.completion_order.append(call)
        if self._outcomes is None:
            return list(range(1, request.sequence_length + 1))
        outcome = self._outcomes[call]
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)

    async def close(self) -> None:
        self.closed = True


class FailingFetcher(BaseSequenceFetcher):
    def __init__(self, msg: str = "Upstream is unavailable") -> None:
        self._msg = msg
        self.calls = 0

    async def fetch(self, request: FetchRequest) -> List[int]:
        self.calls += 1
        raise UpstreamError(self._msg)


def make_app(fetcher: BaseSequenceFetcher) -> FastAPI:
    """
    Builds an app without lifespan so that tests do not configure logging.
    """
    app = FastAPI()
    app.state.dependency_injector = DependencyInjector(fetcher=fetcher)
    register_routes(app)
    return app


def make_http_client(fetcher: BaseSequenceFetcher) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=make_app(fetcher)), base_url="http://test-host"
    )


def random_org_response(data: Sequence[int], advisory_delay: int = 0) -> Dict:
    return {
        "jsonrpc": "2.0",
        "result": {
            "random": {"data": list(data), "completionTime": "2026-10-18 12:00:00Z"},
            "bitsUsed": 33,
            "bitsLeft": 249967,
            "requestsLeft": 999,
            "advisoryDelay": advisory_delay,
        },
        "id": 666,
    }


def random_org_error(message: str, code: int = 401) -> Dict:
    return {
        "jsonrpc": "2.0",
        "error": {"code": code, "message": message, "data": None},
        "id": 666,
    }
