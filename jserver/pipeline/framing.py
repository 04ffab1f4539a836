"""Locate the header/body boundary in a streamed request."""

import logging
from typing import Optional, Protocol

from jserver.bootstrap.config import DEFAULT_READ_CHUNK_SIZE, HEADER_DELIMITER
from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.errors import FramingError, HeaderSegmentTooLargeError

FRAMING_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.framing"), {})


class ByteReader(Protocol):
    """Anything with a socket-style ``recv``; ``b""`` signals end of stream."""

    def recv(self, bufsize: int, /) -> bytes: ...


def advance_match(matched: int, byte: int) -> int:
    """Return how many delimiter bytes are matched after consuming ``byte``.

    A mismatching byte that equals the first delimiter byte restarts the
    match at that byte, so ``\\r\\n\\r\\r\\n\\r\\n`` is still found.
    """
    if byte == HEADER_DELIMITER[matched]:
        return matched + 1
    if byte == HEADER_DELIMITER[0]:
        return 1
    return 0


def read_header_segment(
    reader: ByteReader,
    chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
    max_header_bytes: Optional[int] = None,
) -> tuple[bytes, bytes]:
    """Read until CR LF CR LF and split the buffered bytes around it.

    Returns ``(header_segment, provisional_body)``: the bytes before the first
    delimiter byte, and the bytes that arrived after the fourth delimiter byte
    in the same reads.
    """
    buffer = bytearray()
    matched = 0
    while True:
        try:
            chunk = reader.recv(chunk_size)
        except OSError as exc:
            raise FramingError("Read failed before end of headers") from exc
        if not chunk:
            raise FramingError(
                f"Stream ended after {len(buffer)} bytes without end of headers"
            )

        scan_from = len(buffer)
        buffer.extend(chunk)
        for offset in range(scan_from, len(buffer)):
            matched = advance_match(matched, buffer[offset])
            if matched == len(HEADER_DELIMITER):
                match_start = offset - len(HEADER_DELIMITER) + 1
                header_segment = bytes(buffer[:match_start])
                provisional_body = bytes(buffer[offset + 1 :])
                FRAMING_LOGGER.debug(
                    "Header delimiter found",
                    extra={
                        "event": "headers_framed",
                        "bytes_in": len(buffer),
                        "header_bytes": len(header_segment),
                        "provisional_body_bytes": len(provisional_body),
                    },
                )
                return header_segment, provisional_body

        if max_header_bytes is not None and len(buffer) > max_header_bytes:
            raise HeaderSegmentTooLargeError(max_header_bytes)
