"""Decode a block of ``Name: Value`` header lines."""

import logging
from typing import Iterable

from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.errors import HeaderFormatError
from jserver.domain.hashset import NameSet
from jserver.domain.http_types import RECOGNIZED_HEADERS

HEADERS_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.headers"), {})

_RECOGNIZED_HEADER_PATTERN = RECOGNIZED_HEADERS.alternation_pattern()


def is_recognized(name: str, recognized: NameSet = RECOGNIZED_HEADERS) -> bool:
    """Return True when ``name`` is a known header name, ignoring case."""
    if recognized is RECOGNIZED_HEADERS:
        pattern = _RECOGNIZED_HEADER_PATTERN
    else:
        pattern = recognized.alternation_pattern()
    return pattern.match(name) is not None


def decode_header_line(line: str) -> tuple[str, str]:
    """Split one header line at its first colon."""
    name, separator, value = line.partition(":")
    if not separator:
        raise HeaderFormatError(f"Header line has no colon: {line!r}")
    if not name:
        raise HeaderFormatError(f"Header line has no name: {line!r}")
    return name, value.lstrip(" \t")


def decode_headers(
    lines: Iterable[str], recognized: NameSet = RECOGNIZED_HEADERS
) -> dict[str, str]:
    """Decode header lines up to the first blank one.

    Names keep the case they were sent with and a repeated name keeps its
    last value. Names outside ``recognized`` are kept and logged.
    """
    headers: dict[str, str] = {}
    for line in lines:
        if not line:
            break
        name, value = decode_header_line(line)
        if HEADERS_LOGGER.logger.isEnabledFor(logging.DEBUG) and not is_recognized(
            name, recognized
        ):
            HEADERS_LOGGER.debug(
                "Unrecognized header kept",
                extra={"event": "unrecognized_header", "header": name},
            )
        headers[name] = value
    return headers
