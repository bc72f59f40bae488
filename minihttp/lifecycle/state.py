"""Server lifecycle state and worker thread tracking."""

import threading
import time

from minihttp.domain.correlation_id import get_logger

LIFECYCLE_LOGGER = get_logger("lifecycle")


class ServerLifecycle:
    """Tracks connection threads and the stop signal for the accept loop."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._workers: set[threading.Thread] = set()

    def should_stop(self) -> bool:
        return self._stop_event.is_set()

    def request_stop(self) -> None:
        """Ask the accept loop to stop taking new connections."""
        self._stop_event.set()
        LIFECYCLE_LOGGER.info("Beginning graceful shutdown")

    def register_worker(self, thread: threading.Thread) -> None:
        with self._lock:
            self._workers.add(thread)

    def cleanup_worker(self, thread: threading.Thread) -> None:
        with self._lock:
            self._workers.discard(thread)

    def active_worker_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def wait_for_workers(self, timeout: float) -> bool:
        """Join tracked workers, returning False if any outlive ``timeout``."""
        deadline = time.monotonic() + timeout
        while True:
            with self._lock:
                self._workers = {w for w in self._workers if w.is_alive()}
                active_workers = list(self._workers)
            if not active_workers:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                LIFECYCLE_LOGGER.warning(
                    "Shutdown timeout exceeded",
                    extra={"event": "shutdown_timeout"},
                )
                return False
            for worker in active_workers:
                worker.join(timeout=min(0.1, remaining))
