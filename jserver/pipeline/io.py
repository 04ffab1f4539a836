"""HTTP Input/Output operations."""

import logging
import re
from typing import Optional, Protocol

from jserver.bootstrap.config import DEFAULT_READ_CHUNK_SIZE
from jserver.domain.connection_id import ConnectionLoggerAdapter
from jserver.domain.http_types import Request, Response
from jserver.domain.response_builders import serialize_response
from jserver.pipeline.body import resolve_body
from jserver.pipeline.framing import ByteReader, read_header_segment
from jserver.pipeline.headers import decode_headers
from jserver.pipeline.request_line import decode_request_line

IO_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.io"), {})

HEADER_ENCODING = "iso-8859-1"
_LINE_BREAK = re.compile(r"\r?\n")


class ByteWriter(Protocol):
    """Anything with a socket-style ``sendall``."""

    def sendall(self, data: bytes, /) -> None: ...


def split_header_lines(header_segment: bytes) -> list[str]:
    """Decode the header segment and split it into lines without terminators."""
    return _LINE_BREAK.split(header_segment.decode(HEADER_ENCODING))


def parse_request(header_segment: bytes, body: bytes = b"") -> Request:
    """Decode the request line and headers of ``header_segment``."""
    lines = split_header_lines(header_segment)
    request_line = decode_request_line(lines[0])
    headers = decode_headers(lines[1:])
    return Request(request_line, headers, body)


def read_request(
    reader: ByteReader,
    chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
    max_header_bytes: Optional[int] = None,
    max_body_bytes: Optional[int] = None,
) -> Request:
    """Read one complete request from ``reader``."""
    header_segment, provisional = read_header_segment(
        reader, chunk_size, max_header_bytes
    )
    request = parse_request(header_segment)
    request.body = resolve_body(
        reader,
        request.method,
        request.headers,
        provisional,
        chunk_size,
        max_body_bytes,
    )
    IO_LOGGER.debug(
        "Parsed request",
        extra={
            "event": "request_parsed",
            "method": request.method.value,
            "route": request.target,
            "bytes_in": len(header_segment) + len(request.body),
        },
    )
    return request


def send_response(writer: ByteWriter, response: Response) -> None:
    """Serialize and send the HTTP response over the socket."""
    payload = serialize_response(response)
    writer.sendall(payload)
    IO_LOGGER.debug(
        "Sent response",
        extra={
            "event": "response_sent",
            "status_code": response.status_line.status_code,
            "bytes_out": len(payload),
        },
    )
