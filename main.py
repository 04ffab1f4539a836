"""jserver: one request per connection, parsed, echoed back, then closed."""

import logging
import signal
import sys

from jserver.bootstrap.config import config_from_args, parse_cli_args
from jserver.bootstrap.logging_setup import configure_logging
from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.lifecycle.state import ServerLifecycle
from jserver.transport.accept_loop import run_server

SERVER_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.server"), {})


def main(argv: list[str] | None = None) -> None:
    """Parse configuration, install signal handlers and serve until stopped."""
    args = parse_cli_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level, args.log_destination)
    config = config_from_args(args)
    lifecycle = ServerLifecycle()

    def shutdown_handler(signum: int, _frame) -> None:
        lifecycle.request_stop(signum)

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting server",
        extra={
            "event": "server_starting",
            "host": args.host,
            "port": args.port,
            "log_destination": args.log_destination,
            "log_level": args.log_level,
            "socket_timeout": config.socket_timeout,
            "shutdown_grace_seconds": config.shutdown_grace_seconds,
        },
    )
    run_server(args, config, lifecycle)


if __name__ == "__main__":
    main()
