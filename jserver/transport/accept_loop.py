"""Main connection acceptance loop."""

import argparse
import logging
import socket
import threading

from jserver.bootstrap.config import ServerConfig
from jserver.bootstrap.socket_factory import create_server_socket
from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.http_types import Handler
from jserver.handlers.echo_handler import echo_handler
from jserver.lifecycle.state import ServerLifecycle
from jserver.transport.context import WorkerContext
from jserver.transport.worker import handle_client

ACCEPT_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("jserver.transport.accept"), {}
)


def dispatch_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> threading.Thread:
    """Start a dedicated worker thread for an accepted connection."""
    if ACCEPT_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ACCEPT_LOGGER.debug(
            "Client connection accepted",
            extra={
                "event": "client_accepted",
                "client": f"{client_address[0]}:{client_address[1]}",
            },
        )
    thread = threading.Thread(
        target=handle_client,
        args=(client_socket, client_address, context),
        daemon=False,
    )
    if context.lifecycle is not None:
        context.lifecycle.register_worker(thread)
    thread.start()
    return thread


def run_server(
    args: argparse.Namespace,
    config: ServerConfig,
    lifecycle: ServerLifecycle,
    handler: Handler = echo_handler,
) -> None:
    """Accept connections until shutdown is requested, then drain workers."""
    server_socket = create_server_socket(args.host, args.port)
    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={"event": "server_listening", "host": args.host, "port": args.port},
    )
    context = WorkerContext(config=config, handler=handler, lifecycle=lifecycle)

    try:
        while not lifecycle.should_stop():
            try:
                client_socket, client_address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as error:
                if lifecycle.should_stop():
                    break
                ACCEPT_LOGGER.error(
                    "Socket accept failed",
                    extra={"event": "accept_error", "error_type": type(error).__name__},
                )
                continue
            dispatch_client(client_socket, client_address, context)
    finally:
        server_socket.close()
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={
                "event": "shutdown_waiting",
                "shutdown_grace_seconds": config.shutdown_grace_seconds,
            },
        )
        lifecycle.wait_for_workers(config.shutdown_grace_seconds)
        ACCEPT_LOGGER.info("Server shutdown complete", extra={"event": "server_stopped"})
