"""Error taxonomy for request parsing and response construction."""


class JServerError(Exception):
    """Base class for all errors raised by the server core."""


class HttpParseError(JServerError):
    """Raised when a request read from a connection cannot be decoded."""


class FramingError(HttpParseError):
    """Raised when the header delimiter is never found on the stream."""


class HeaderSegmentTooLargeError(FramingError):
    """Raised when the header segment grows past the configured bound."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Header segment exceeds {limit} bytes")
        self.limit = limit


class RequestLineError(HttpParseError):
    """Raised when the request line is malformed or uses an unknown method."""


class HeaderFormatError(HttpParseError):
    """Raised when a header line is not of the form ``Name: Value``."""


class MissingLengthError(HttpParseError):
    """Raised when a body-carrying request declares no Content-Length."""


class LengthFormatError(HttpParseError):
    """Raised when Content-Length is not a non-negative integer."""


class BodyTooLargeError(HttpParseError):
    """Raised when the declared Content-Length exceeds the configured bound."""

    def __init__(self, declared: int, limit: int) -> None:
        super().__init__(f"Declared body of {declared} bytes exceeds {limit}")
        self.declared = declared
        self.limit = limit


class ConnectionTruncatedError(HttpParseError):
    """Raised when the peer stops sending before the declared body arrived."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Connection closed after {received} of {expected} body bytes"
        )
        self.expected = expected
        self.received = received


class UnknownStatusCodeError(JServerError):
    """Raised when a response is built with a code absent from the registry."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"{status_code} is not a registered status code")
        self.status_code = status_code
