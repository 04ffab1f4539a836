"""Server lifecycle state and worker thread tracking."""

import logging
import threading
import time
from typing import Optional

from jserver.domain.connection_id import ConnectionLoggerAdapter

LIFECYCLE_LOGGER = ConnectionLoggerAdapter(logging.getLogger("jserver.lifecycle"), {})


class ServerLifecycle:
    """Stop flag for the accept loop plus the set of live connection workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._workers: set[threading.Thread] = set()

    def should_stop(self) -> bool:
        """Return True once shutdown was requested."""
        return self._stop_event.is_set()

    def request_stop(self, signum: Optional[int] = None) -> None:
        """Ask the accept loop to stop taking new connections."""
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        LIFECYCLE_LOGGER.info(
            "Beginning graceful shutdown",
            extra={"event": "shutdown_requested", "signal": signum},
        )

    def register_worker(self, thread: threading.Thread) -> None:
        """Track ``thread``; called by the accept loop before it starts."""
        with self._lock:
            self._workers.add(thread)

    def discard_worker(self, thread: threading.Thread) -> None:
        with self._lock:
            self._workers.discard(thread)

    def active_worker_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def wait_for_workers(self, timeout: float) -> bool:
        """Join live workers until they finish or ``timeout`` seconds pass."""
        deadline = time.monotonic() + timeout
        while True:
            with self._lock:
                pending = [worker for worker in self._workers if worker.is_alive()]
            if not pending:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                LIFECYCLE_LOGGER.warning(
                    "Shutdown timeout exceeded",
                    extra={
                        "event": "shutdown_timeout",
                        "remaining_workers": len(pending),
                    },
                )
                return False
            pending[0].join(timeout=min(0.1, remaining))
