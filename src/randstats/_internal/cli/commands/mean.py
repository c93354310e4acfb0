import asyncio
import os
from argparse import Namespace

import orjson

from randstats._internal.cli.commands import BaseCommand
from randstats._internal.cli.utils.common import console
from randstats._internal.cli.utils.mean import get_mean_table
from randstats._internal.core.errors import CLIError, InvalidParameterError
from randstats._internal.core.models.jobs import AggregationResult
from randstats._internal.server.schemas.mean import MeanResponse
from randstats._internal.server.services.aggregator import Aggregator
from randstats._internal.server.services.fetchers.random_org import RandomOrgFetcher
from randstats._internal.utils.json_utils import get_orjson_default_options, orjson_default


class MeanCommand(BaseCommand):
    NAME = "mean"
    DESCRIPTION = "Request random sequences and show their standard deviations"

    def _register(self):
        self._parser.add_argument(
            "-r",
            "--requests",
            type=int,
            default=1,
            help="The number of sequences to request. Defaults to 1",
        )
        self._parser.add_argument(
            "-n",
            "--length",
            type=int,
            default=1,
            help="The length of every sequence. Defaults to 1",
        )
        self._parser.add_argument(
            "--json",
            action="store_true",
            help="Output in JSON format",
        )

    def _command(self, args: Namespace):
        super()._command(args)
        api_key = os.getenv("RANDOM_ORG_API_KEY")
        if not api_key:
            raise CLIError("Set RANDOM_ORG_API_KEY to request random.org")
        try:
            result = asyncio.run(_aggregate(api_key, args.requests, args.length))
        except InvalidParameterError as e:
            raise CLIError(e.msg)

        if args.json:
            output = orjson.dumps(
                MeanResponse.from_result(result),
                option=get_orjson_default_options(),
                default=orjson_default,
            )
            print(output.decode())
            return
        console.print(get_mean_table(result))
        console.print(f"\nStandard deviation of sums: [code]{result.std_dev_of_sums:.3f}[/]")
        if result.failures:
            console.print(
                f"[warning]{len(result.failures)} of {result.request_count} requests failed[/]"
            )


async def _aggregate(api_key: str, requests: int, length: int) -> AggregationResult:
    fetcher = RandomOrgFetcher(api_key=api_key)
    try:
        return await Aggregator(fetcher).aggregate(requests, length)
    finally:
        await fetcher.close()
