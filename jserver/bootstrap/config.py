"""Server configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


DEFAULT_HOST = os.getenv("JSERVER_HOST", "localhost")
DEFAULT_PORT = _env_int("JSERVER_PORT", 9090)
DEFAULT_READ_CHUNK_SIZE = _env_int("JSERVER_READ_CHUNK_SIZE", 256)
DEFAULT_MAX_HEADER_BYTES = _env_int("JSERVER_MAX_HEADER_BYTES", 64 * 1024)
DEFAULT_MAX_BODY_BYTES = _env_int("JSERVER_MAX_BODY_BYTES", 5 * 1024 * 1024)
DEFAULT_SOCKET_TIMEOUT = _env_int("JSERVER_SOCKET_TIMEOUT", 60)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("JSERVER_SHUTDOWN_GRACE_SECONDS", 30)

HEADER_DELIMITER = b"\r\n\r\n"
CONTENT_LENGTH_HEADER = "Content-Length"


@dataclass
class ServerConfig:
    """Per-connection limits plus timeout and shutdown settings."""

    socket_timeout: int
    shutdown_grace_seconds: int
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    max_header_bytes: int = DEFAULT_MAX_HEADER_BYTES
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(description="jserver configuration")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    default_log_level = os.getenv("JSERVER_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("JSERVER_LOG_DESTINATION", "stdout")
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Socket timeout in seconds for reading a request",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for graceful shutdown",
    )
    parser.add_argument(
        "--read-chunk-size",
        type=_positive_int,
        default=DEFAULT_READ_CHUNK_SIZE,
        help="Bytes requested from the socket per read",
    )
    parser.add_argument(
        "--max-header-bytes",
        type=_positive_int,
        default=DEFAULT_MAX_HEADER_BYTES,
        help="Largest header segment accepted before the delimiter",
    )
    parser.add_argument(
        "--max-body-bytes",
        type=_positive_int,
        default=DEFAULT_MAX_BODY_BYTES,
        help="Largest Content-Length accepted for a request body",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Build the worker configuration from parsed CLI arguments."""
    return ServerConfig(
        socket_timeout=args.socket_timeout,
        shutdown_grace_seconds=args.shutdown_grace_seconds,
        read_chunk_size=args.read_chunk_size,
        max_header_bytes=args.max_header_bytes,
        max_body_bytes=args.max_body_bytes,
    )
