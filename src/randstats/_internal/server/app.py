import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from randstats._internal.core.errors import InvalidParameterError, SerializationError
from randstats._internal.server import settings
from randstats._internal.server.deps import DependencyInjector, get_injector_from_app
from randstats._internal.server.routers import mean
from randstats._internal.server.services.fetchers.base import BaseSequenceFetcher
from randstats._internal.server.services.fetchers.random_org import RandomOrgFetcher
from randstats._internal.server.services.limiter import UpstreamLimiter
from randstats._internal.server.utils.logging import configure_logging
from randstats._internal.server.utils.routers import error_plain_text
from randstats._internal.utils.logging import get_logger
from randstats.version import __version__

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    injector = get_injector_from_app(app)
    if isinstance(injector.get_fetcher(), RandomOrgFetcher) and not settings.RANDOM_ORG_API_KEY:
        logger.warning("RANDOM_ORG_API_KEY is not set, all upstream requests will fail")
    logger.info("randstats %s is running at %s", __version__, settings.SERVER_URL)
    yield
    await injector.get_fetcher().close()


def make_app(fetcher: Optional[BaseSequenceFetcher] = None) -> FastAPI:
    if fetcher is None:
        fetcher = RandomOrgFetcher(
            api_key=settings.RANDOM_ORG_API_KEY,
            url=settings.RANDOM_ORG_URL,
            timeout=settings.UPSTREAM_TIMEOUT,
            limiter=UpstreamLimiter(settings.UPSTREAM_MAX_CONCURRENCY),
        )

    app = FastAPI(docs_url="/api/docs", lifespan=lifespan)
    app.state.dependency_injector = DependencyInjector(fetcher=fetcher)
    register_routes(app)
    return app


def register_routes(app: FastAPI):
    app.include_router(mean.router, prefix="/mean")

    @app.exception_handler(InvalidParameterError)
    async def invalid_parameter_error_handler(request: Request, exc: InvalidParameterError):
        return error_plain_text(exc.msg)

    @app.exception_handler(SerializationError)
    async def serialization_error_handler(request: Request, exc: SerializationError):
        logger.error("Failed to serialize response for %s", request.url.path, exc_info=exc)
        return error_plain_text(str(exc))

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug(
            "Processed request %s %s in %s", request.method, request.url, f"{process_time:0.6f}s"
        )
        return response

    @app.get("/")
    async def get_info():
        return {"version": __version__}
