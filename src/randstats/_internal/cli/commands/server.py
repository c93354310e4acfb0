import os
from argparse import Namespace

import uvicorn

from randstats._internal.cli.commands import BaseCommand
from randstats._internal.server import settings


class ServerCommand(BaseCommand):
    NAME = "server"
    DESCRIPTION = "Start a server"

    def _register(self):
        self._parser.add_argument(
            "--host",
            type=str,
            help="Bind socket to this host. Defaults to 127.0.0.1",
            default=os.getenv("RANDSTATS_SERVER_HOST", "127.0.0.1"),
        )
        self._parser.add_argument(
            "-p",
            "--port",
            type=int,
            help="Bind socket to this port. Defaults to 8000.",
            default=os.getenv("RANDSTATS_SERVER_PORT", 8000),
        )
        self._parser.add_argument(
            "-l",
            "--log-level",
            type=str,
            help="Server logging level. Defaults to INFO.",
            default=os.getenv("RANDSTATS_SERVER_LOG_LEVEL", "INFO"),
        )

    def _command(self, args: Namespace):
        super()._command(args)

        # The settings module is already imported by other commands
        settings.SERVER_HOST = args.host
        settings.SERVER_PORT = args.port
        settings.SERVER_URL = f"http://{args.host}:{args.port}"
        settings.LOG_LEVEL = args.log_level.upper()

        uvicorn.run(
            "randstats._internal.server.main:app",
            host=args.host,
            port=args.port,
            log_level=settings.UVICORN_LOG_LEVEL,
            workers=1,
        )

    def _configure_logging(self) -> None:
        # The server configures its own logging on startup
        pass
