import argparse

from rich.markup import escape
from rich_argparse import RichHelpFormatter

from randstats._internal.cli.commands.mean import MeanCommand
from randstats._internal.cli.commands.server import ServerCommand
from randstats._internal.cli.utils.common import _colors, console
from randstats._internal.core.errors import CLIError
from randstats._internal.utils.logging import get_logger
from randstats.version import __version__ as version

logger = get_logger(__name__)


def main():
    RichHelpFormatter.usage_markup = True
    RichHelpFormatter.styles["code"] = _colors["code"]
    RichHelpFormatter.styles["argparse.args"] = _colors["code"]
    RichHelpFormatter.styles["argparse.groups"] = "bold grey74"
    RichHelpFormatter.styles["argparse.text"] = "grey74"

    parser = argparse.ArgumentParser(
        description="Standard deviations of true random integer sequences from random.org\n",
        formatter_class=RichHelpFormatter,
        epilog="Run [code]randstats COMMAND --help[/] for more information on a particular command.\n ",
        add_help=True,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{version}",
        help="Show randstats version",
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    subparsers = parser.add_subparsers(metavar="COMMAND")
    MeanCommand.register(subparsers)
    ServerCommand.register(subparsers)

    args, unknown_args = parser.parse_known_args()
    args.unknown = unknown_args

    try:
        args.func(args)
    except CLIError as e:
        console.print(f"[error]{escape(str(e))}[/]")
        logger.debug(e, exc_info=True)
        exit(1)


if __name__ == "__main__":
    main()
