import logging
from typing import Any, Dict, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from randstats._internal import settings

_colors = {
    "secondary": "grey58",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "code": "bold sea_green3",
}

console = Console(theme=Theme(_colors))


def configure_logging():
    randstats_logger = logging.getLogger("randstats")
    randstats_logger.handlers.clear()

    handler = RichHandler(console=console, markup=False)
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    handler.setLevel(settings.CLI_LOG_LEVEL)
    randstats_logger.addHandler(handler)

    # the logger allows all messages, filtering is done by the handler
    randstats_logger.setLevel(logging.DEBUG)


def add_row_from_dict(table: Table, data: Dict[Union[str, int], Any], **kwargs):
    """Maps dict keys to a table columns. `data` key is a column name or index. Missing keys are ignored."""
    row = []
    for i, col in enumerate(table.columns):
        if col.header in data:
            row.append(data[col.header])
        elif i in data:
            row.append(data[i])
        else:
            row.append("")
    table.add_row(*row, **kwargs)
