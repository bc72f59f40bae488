"""Per-path mutual exclusion for concurrent file writes."""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class PathLockRegistry:
    """Hands out one lock per resolved filesystem path.

    Entries are reference counted and dropped once no writer holds or waits
    on them, so the registry does not grow with every distinct filename.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}
        self._waiters: dict[Path, int] = {}

    @contextmanager
    def hold(self, path: Path) -> Iterator[None]:
        """Hold the lock for ``path`` for the duration of the block."""
        with self._lock:
            path_lock = self._locks.setdefault(path, threading.Lock())
            self._waiters[path] = self._waiters.get(path, 0) + 1
        try:
            with path_lock:
                yield
        finally:
            with self._lock:
                remaining = self._waiters[path] - 1
                if remaining:
                    self._waiters[path] = remaining
                else:
                    del self._waiters[path]
                    del self._locks[path]

    def tracked_paths(self) -> int:
        """Return how many paths currently have a writer holding or waiting."""
        with self._lock:
            return len(self._locks)
