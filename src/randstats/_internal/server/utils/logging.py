import asyncio
import logging
import sys
from typing import Callable, Dict

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from randstats._internal.server import settings


class AsyncioCancelledErrorFilter(logging.Filter):
    """
    Drops records about cancelled tasks. Upstream fetches are shielded from
    client disconnects, so cancellations only show up on shutdown.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.exc_info and isinstance(record.exc_info[1], asyncio.CancelledError))


def _rich_handler() -> logging.Handler:
    handler = RichHandler(markup=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def _standard_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(levelname)s %(asctime)s.%(msecs)03d %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            json_ensure_ascii=False,
            rename_fields={"name": "logger", "asctime": "timestamp", "levelname": "level"},
        )
    )
    return handler


_HANDLER_FACTORIES: Dict[str, Callable[[], logging.Handler]] = {
    "rich": _rich_handler,
    "standard": _standard_handler,
    "json": _json_handler,
}


def configure_logging():
    factory = _HANDLER_FACTORIES.get(settings.LOG_FORMAT)
    if factory is None:
        raise ValueError(f"Invalid settings.LOG_FORMAT: {settings.LOG_FORMAT}")
    handler = factory()
    handler.addFilter(AsyncioCancelledErrorFilter())

    root_logger = logging.getLogger(None)
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.ROOT_LOG_LEVEL)
    logging.getLogger("randstats").setLevel(settings.LOG_LEVEL)
    # httpx logs every upstream request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
