"""Default request handler that echoes the request body."""

import logging

from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.http_types import Request, Response
from jserver.domain.response_builders import ok_response

ECHO_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.handlers.echo"), {})


def echo_handler(request: Request) -> Response:
    """Answer 200 with the request body as text."""
    content = request.body.decode("utf-8", errors="replace")
    if ECHO_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ECHO_LOGGER.debug(
            "Echo request processed",
            extra={"event": "echo_request", "content_length": len(request.body)},
        )
    return ok_response(content)
