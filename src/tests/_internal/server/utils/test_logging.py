import asyncio
import logging
from typing import Generator
from unittest.mock import patch

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from randstats._internal.server.utils.logging import (
    AsyncioCancelledErrorFilter,
    configure_logging,
)


@pytest.fixture
def root_handlers() -> Generator[list, None, None]:
    root_logger = logging.getLogger(None)
    handlers_before = list(root_logger.handlers)
    level_before = root_logger.level
    randstats_level_before = logging.getLogger("randstats").level
    yield handlers_before
    root_logger.handlers = handlers_before
    root_logger.setLevel(level_before)
    logging.getLogger("randstats").setLevel(randstats_level_before)


def _make_record(exc: BaseException) -> logging.LogRecord:
    return logging.LogRecord(
        "randstats", logging.ERROR, __file__, 1, "msg", None, (type(exc), exc, None)
    )


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("log_format", "formatter_type", "handler_type"),
        [
            ("standard", logging.Formatter, logging.StreamHandler),
            ("json", JsonFormatter, logging.StreamHandler),
            ("rich", logging.Formatter, RichHandler),
        ],
    )
    def test_formats(self, root_handlers, log_format, formatter_type, handler_type):
        with (
            patch("randstats._internal.server.settings.LOG_FORMAT", log_format),
            patch("randstats._internal.server.settings.LOG_LEVEL", "DEBUG"),
        ):
            configure_logging()
        handler = logging.getLogger(None).handlers[-1]
        assert handler not in root_handlers
        assert isinstance(handler, handler_type)
        assert isinstance(handler.formatter, formatter_type)
        assert logging.getLogger("randstats").level == logging.DEBUG

    def test_builds_only_selected_handler(self, root_handlers):
        with (
            patch("randstats._internal.server.settings.LOG_FORMAT", "json"),
            patch("randstats._internal.server.utils.logging.RichHandler") as rich_handler,
        ):
            configure_logging()
        rich_handler.assert_not_called()
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_invalid_format(self, root_handlers):
        with patch("randstats._internal.server.settings.LOG_FORMAT", "xml"):
            with pytest.raises(ValueError, match="Invalid settings.LOG_FORMAT"):
                configure_logging()


class TestAsyncioCancelledErrorFilter:
    def test_drops_cancelled_error(self):
        assert not AsyncioCancelledErrorFilter().filter(_make_record(asyncio.CancelledError()))

    def test_keeps_other_records(self):
        log_filter = AsyncioCancelledErrorFilter()
        assert log_filter.filter(_make_record(RuntimeError("boom")))
        record = logging.LogRecord("randstats", logging.INFO, __file__, 1, "msg", None, None)
        assert log_filter.filter(record)
