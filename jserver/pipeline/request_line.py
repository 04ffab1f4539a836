"""Decode the ``METHOD SP TARGET SP VERSION`` request line."""

import logging
import re

from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.errors import RequestLineError
from jserver.domain.http_types import RECOGNIZED_METHODS, Method, RequestLine

REQUEST_LINE_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("jserver.request_line"), {}
)

# Fields are separated by SP only; the target is otherwise opaque.
REQUEST_LINE_PATTERN = re.compile(r"([^ ]+) ([^ ]+) (HTTP/[0-9]+\.[0-9]+)")

_RECOGNIZED_METHOD_PATTERN = RECOGNIZED_METHODS.alternation_pattern()


def decode_method(token: str) -> Method:
    """Map a method token onto ``Method``, comparing case-sensitively."""
    try:
        return Method(token)
    except ValueError as exc:
        if _RECOGNIZED_METHOD_PATTERN.match(token) is not None:
            REQUEST_LINE_LOGGER.debug(
                "Method sent in the wrong case",
                extra={"event": "method_case_mismatch", "method": token},
            )
        raise RequestLineError(f"Unrecognized method {token!r}") from exc


def decode_request_line(line: str) -> RequestLine:
    """Parse the first line of a request into its three fields."""
    match = REQUEST_LINE_PATTERN.fullmatch(line)
    if match is None:
        raise RequestLineError(f"Malformed request line {line!r}")
    method_token, target, version = match.groups()
    return RequestLine(decode_method(method_token), target, version)
