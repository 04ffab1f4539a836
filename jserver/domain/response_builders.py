"""Pure HTTP response builders and the wire serializer."""

from typing import Optional

from jserver.domain.errors import UnknownStatusCodeError
from jserver.domain.http_types import Response, StatusLine

HTTP_VERSION = "HTTP/1.1"
CRLF = "\r\n"

REASON_PHRASES: dict[int, str] = {
    200: "Ok",
    400: "Bad Request",
    413: "Payload Too Large",
    500: "Internal Server Error",
}


def new_status_line(status_code: int) -> StatusLine:
    """Look up the reason phrase for ``status_code`` and build a status line."""
    try:
        reason_phrase = REASON_PHRASES[status_code]
    except KeyError as exc:
        raise UnknownStatusCodeError(status_code) from exc
    return StatusLine(HTTP_VERSION, status_code, reason_phrase)


def new_response(
    status_code: int, headers: Optional[dict[str, str]] = None, body: str = ""
) -> Response:
    """Build a response, failing before serialization for unknown codes."""
    status_line = new_status_line(status_code)
    return Response(status_line, dict(headers or {}), body)


def format_status_line(status_line: StatusLine) -> str:
    """Render ``VERSION SP CODE SP PHRASE`` without the line terminator."""
    return " ".join(
        (status_line.version, str(status_line.status_code), status_line.reason_phrase)
    )


def serialize_response(response: Response) -> bytes:
    """Serialize the status line, headers and body into wire format."""
    lines = [format_status_line(response.status_line)]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    head = CRLF.join(lines) + CRLF + CRLF
    return (head + response.body).encode("utf-8")


def ok_response(body: str = "", headers: Optional[dict[str, str]] = None) -> Response:
    """Return a 200 response carrying ``body``."""
    return new_response(200, headers, body)


def bad_request_response() -> Response:
    """Produce a 400 response for requests that could not be decoded."""
    return new_response(400)


def entity_too_large_response() -> Response:
    """Produce a 413 response for bodies over the configured limit."""
    return new_response(413)


def internal_error_response() -> Response:
    """Produce a 500 response for handler failures."""
    return new_response(500)
