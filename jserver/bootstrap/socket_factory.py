"""Listening socket creation."""

import socket

ACCEPT_POLL_SECONDS = 0.5


def create_server_socket(host: str, port: int) -> socket.socket:
    """Bind a listening TCP socket whose accept wakes up to check for shutdown."""
    server_socket = socket.create_server((host, port), reuse_port=True)
    server_socket.settimeout(ACCEPT_POLL_SECONDS)
    return server_socket
