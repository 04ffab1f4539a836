"""Worker thread logic for handling one client connection."""

import logging
import socket
import threading
import time
from typing import Optional

from jserver.domain.connection_id import (
    ConnectionLoggerAdapter,
    bind_connection_id,
    new_connection_id,
    release_connection_id,
)
from jserver.domain.errors import (
    BodyTooLargeError,
    ConnectionTruncatedError,
    FramingError,
    HeaderSegmentTooLargeError,
    HttpParseError,
)
from jserver.domain.http_types import Request, Response
from jserver.domain.response_builders import (
    bad_request_response,
    entity_too_large_response,
    internal_error_response,
)
from jserver.pipeline.io import read_request, send_response
from jserver.transport.context import WorkerContext

WORKER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("jserver.transport.worker"), {}
)


def error_response_for(error: HttpParseError) -> Optional[Response]:
    """Pick the response for a parse failure, or None when the peer is gone."""
    if isinstance(error, HeaderSegmentTooLargeError):
        return bad_request_response()
    if isinstance(error, (FramingError, ConnectionTruncatedError)):
        return None
    if isinstance(error, BodyTooLargeError):
        return entity_too_large_response()
    return bad_request_response()


def _read(
    client_socket: socket.socket, context: WorkerContext, client_addr_str: str
) -> Optional[Request]:
    config = context.config
    try:
        return read_request(
            client_socket,
            config.read_chunk_size,
            config.max_header_bytes,
            config.max_body_bytes,
        )
    except HttpParseError as error:
        WORKER_LOGGER.warning(
            "Request could not be parsed",
            extra={
                "event": "malformed_request",
                "client": client_addr_str,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        response = error_response_for(error)
        if response is not None:
            send_response(client_socket, response)
        return None


def _respond(
    client_socket: socket.socket,
    request: Request,
    context: WorkerContext,
    client_addr_str: str,
) -> None:
    try:
        response = context.handler(request)
    except Exception as error:  # pylint: disable=broad-except
        WORKER_LOGGER.error(
            "Handler raised",
            extra={
                "event": "handler_error",
                "client": client_addr_str,
                "route": request.target,
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )
        response = internal_error_response()
    send_response(client_socket, response)


def _close(client_socket: socket.socket, client_addr_str: str) -> None:
    try:
        client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    client_socket.close()
    WORKER_LOGGER.debug(
        "Socket closed",
        extra={"event": "socket_closed", "client": client_addr_str},
    )


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Read one request, answer it, and close the connection."""
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    bind_connection_id(new_connection_id())
    started = time.monotonic()

    try:
        client_socket.settimeout(context.config.socket_timeout)
        request = _read(client_socket, context, client_addr_str)
        if request is not None:
            WORKER_LOGGER.debug(
                "Request line parsed",
                extra={
                    "event": "request_line_parsed",
                    "method": request.method.value,
                    "route": request.target,
                },
            )
            _respond(client_socket, request, context, client_addr_str)
            WORKER_LOGGER.info(
                "Request complete",
                extra={
                    "event": "request_complete",
                    "client": client_addr_str,
                    "method": request.method.value,
                    "route": request.target,
                    "duration_ms": round((time.monotonic() - started) * 1000, 3),
                },
            )
    except OSError as error:
        WORKER_LOGGER.error(
            "Error handling client connection",
            extra={
                "event": "connection_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
            },
        )
    except Exception as error:  # pylint: disable=broad-except
        WORKER_LOGGER.error(
            "Unexpected error in worker",
            extra={
                "event": "worker_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=True,
        )
    finally:
        _close(client_socket, client_addr_str)
        if context.lifecycle is not None:
            context.lifecycle.discard_worker(threading.current_thread())
        release_connection_id()
