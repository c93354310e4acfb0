from fastapi import Depends, FastAPI, Request
from typing_extensions import Annotated

from randstats._internal.core.errors import UnexpectedServerError
from randstats._internal.server.services.aggregator import Aggregator
from randstats._internal.server.services.fetchers.base import BaseSequenceFetcher


class DependencyInjector:
    """
    An injector instance stored in FastAPI's app.state.dependency_injector
    configures the app to use a specific set of dependencies, e.g.
    a stub fetcher in tests.
    """

    def __init__(self, fetcher: BaseSequenceFetcher) -> None:
        self._fetcher = fetcher

    def get_fetcher(self) -> BaseSequenceFetcher:
        return self._fetcher

    def get_aggregator(self) -> Aggregator:
        return Aggregator(self._fetcher)


def get_injector_from_app(app: FastAPI) -> DependencyInjector:
    injector = getattr(app.state, "dependency_injector", None)
    if not isinstance(injector, DependencyInjector):
        raise UnexpectedServerError(f"Unexpected dependency_injector type {type(injector)}")
    return injector


async def get_injector(request: Request) -> DependencyInjector:
    return get_injector_from_app(request.app)


async def get_aggregator(
    injector: Annotated[DependencyInjector, Depends(get_injector)],
) -> Aggregator:
    return injector.get_aggregator()
