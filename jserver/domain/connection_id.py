"""Per-connection identifiers carried into log records via contextvars."""

import contextvars
import logging
import uuid
from typing import Any, MutableMapping, Optional

_connection_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "connection_id", default=None
)

LOGGER_PREFIX = "jserver."


def new_connection_id() -> str:
    """Return a short random identifier for one accepted connection."""
    return uuid.uuid4().hex[:16]


def current_connection_id() -> Optional[str]:
    """Return the identifier bound to the running worker, if any."""
    return _connection_id_var.get()


def bind_connection_id(connection_id: str) -> None:
    """Bind ``connection_id`` to the current thread's context."""
    _connection_id_var.set(connection_id)


def release_connection_id() -> None:
    """Forget the identifier once the connection is closed."""
    _connection_id_var.set(None)


class ConnectionLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter stamping each record with its connection and component."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        connection_id = current_connection_id()
        extra["connection_id"] = connection_id if connection_id is not None else "-"

        logger_name = self.logger.name
        if logger_name.startswith(LOGGER_PREFIX):
            extra["component"] = logger_name[len(LOGGER_PREFIX) :]
        else:
            extra["component"] = logger_name
        kwargs["extra"] = extra
        return msg, kwargs
