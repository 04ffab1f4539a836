"""Context object shared across worker threads."""

from dataclasses import dataclass
from typing import Optional

from jserver.bootstrap.config import ServerConfig
from jserver.domain.http_types import Handler
from jserver.handlers.echo_handler import echo_handler
from jserver.lifecycle.state import ServerLifecycle


@dataclass
class WorkerContext:
    """Read-only dependencies handed to every connection worker."""

    config: ServerConfig
    handler: Handler = echo_handler
    lifecycle: Optional[ServerLifecycle] = None
