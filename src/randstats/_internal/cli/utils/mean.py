from rich.markup import escape
from rich.table import Table

from randstats._internal.cli.utils.common import add_row_from_dict
from randstats._internal.core.models.jobs import AggregationResult


def get_mean_table(result: AggregationResult) -> Table:
    table = Table(box=None)
    table.add_column("#", no_wrap=True)
    table.add_column("NUMBERS")
    table.add_column("SUM")
    table.add_column("STDDEV")
    table.add_column("ERROR")

    for i, (sequence, std_dev) in enumerate(zip(result.sequences, result.std_devs)):
        row = {
            "#": str(i),
            "NUMBERS": " ".join(str(n) for n in sequence),
            "SUM": str(sum(sequence)),
            "STDDEV": f"{std_dev:.3f}",
            "ERROR": escape(result.failures.get(i, "")),
        }
        add_row_from_dict(table, row)
    return table
