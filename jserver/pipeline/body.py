"""Resolve and read a request body from its declared Content-Length."""

import logging
import re
from typing import Optional

from jserver.bootstrap.config import CONTENT_LENGTH_HEADER, DEFAULT_READ_CHUNK_SIZE
from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.errors import (
    BodyTooLargeError,
    ConnectionTruncatedError,
    LengthFormatError,
    MissingLengthError,
)
from jserver.domain.http_types import Method
from jserver.pipeline.framing import ByteReader

BODY_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.body"), {})

BODY_METHODS = frozenset({Method.POST, Method.PUT})

_DIGITS = re.compile(r"[0-9]+")

# Leading zeros are not counted.
MAX_LENGTH_DIGITS = 19


def carries_body(method: Method) -> bool:
    """Return True for methods whose body length must be declared."""
    return method in BODY_METHODS


def declared_content_length(headers: dict[str, str]) -> int:
    """Return the Content-Length value as a non-negative integer."""
    try:
        raw_value = headers[CONTENT_LENGTH_HEADER]
    except KeyError as exc:
        raise MissingLengthError(
            f"{CONTENT_LENGTH_HEADER} is required for this method"
        ) from exc
    value = raw_value.rstrip(" \t")
    if _DIGITS.fullmatch(value) is None:
        raise LengthFormatError(f"Invalid {CONTENT_LENGTH_HEADER}: {raw_value!r}")
    significant = value.lstrip("0") or "0"
    if len(significant) > MAX_LENGTH_DIGITS:
        raise LengthFormatError(
            f"{CONTENT_LENGTH_HEADER} has too many digits ({len(significant)})"
        )
    return int(significant)


def read_exact(
    reader: ByteReader, buffer: bytearray, expected: int, chunk_size: int
) -> None:
    """Append reads to ``buffer`` until it holds ``expected`` bytes."""
    while len(buffer) < expected:
        wanted = min(chunk_size, expected - len(buffer))
        try:
            chunk = reader.recv(wanted)
        except OSError as exc:
            raise ConnectionTruncatedError(expected, len(buffer)) from exc
        if not chunk:
            raise ConnectionTruncatedError(expected, len(buffer))
        buffer.extend(chunk)


def resolve_body(
    reader: ByteReader,
    method: Method,
    headers: dict[str, str],
    provisional: bytes,
    chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
    max_body_bytes: Optional[int] = None,
) -> bytes:
    """Return exactly the declared body for body-carrying methods."""
    if not carries_body(method):
        if provisional:
            BODY_LOGGER.debug(
                "Discarding bytes sent after headers",
                extra={"event": "body_discarded", "bytes_in": len(provisional)},
            )
        return b""

    content_length = declared_content_length(headers)
    if max_body_bytes is not None and content_length > max_body_bytes:
        raise BodyTooLargeError(content_length, max_body_bytes)

    body = bytearray(provisional[:content_length])
    read_exact(reader, body, content_length, chunk_size)
    BODY_LOGGER.debug(
        "Request body read",
        extra={
            "event": "body_read",
            "content_length": content_length,
            "provisional_body_bytes": len(provisional),
        },
    )
    return bytes(body)
