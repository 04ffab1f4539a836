"""Shared HTTP type definitions to avoid circular imports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from jserver.domain.hashset import NameSet


class Method(str, Enum):
    """Request methods the request-line decoder accepts."""

    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


RECOGNIZED_METHODS = NameSet.from_iterable(method.value for method in Method)

RECOGNIZED_HEADERS = NameSet(
    # general-header
    "Cache-Control",
    "Connection",
    "Date",
    "Pragma",
    "Trailer",
    "Transfer-Encoding",
    "Upgrade",
    "Via",
    "Warning",
    # request-header
    "Accept",
    "Accept-Charset",
    "Accept-Encoding",
    "Accept-Language",
    "Authorization",
    "Expect",
    "From",
    "Host",
    "If-Match",
    "If-Modified-Since",
    "If-None-Match",
    "If-Range",
    "If-Unmodified-Since",
    "Max-Forwards",
    "Proxy-Authorization",
    "Range",
    "Referer",
    "TE",
    "User-Agent",
    # entity-header
    "Allow",
    "Content-Encoding",
    "Content-Language",
    "Content-Length",
    "Content-Location",
    "Content-MD5",
    "Content-Range",
    "Content-Type",
    "Expires",
    "Last-Modified",
    "extension-header",
)


@dataclass(frozen=True)
class RequestLine:
    """The decoded ``METHOD SP TARGET SP VERSION`` line."""

    method: Method
    target: str
    version: str


@dataclass
class Request:
    """Represents a parsed HTTP request."""

    request_line: RequestLine
    headers: dict[str, str]
    body: bytes = b""

    @property
    def method(self) -> Method:
        return self.request_line.method

    @property
    def target(self) -> str:
        return self.request_line.target

    @property
    def version(self) -> str:
        return self.request_line.version


@dataclass(frozen=True)
class StatusLine:
    """Status line of a response; the phrase always comes from the registry."""

    version: str
    status_code: int
    reason_phrase: str


@dataclass(frozen=True)
class Response:
    """Represents an HTTP response to be sent to a client."""

    status_line: StatusLine
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


Handler = Callable[[Request], Response]
