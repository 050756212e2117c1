"""Mutual exclusion for grading runs: bounded wait, then skip."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class GradingBusyError(RuntimeError):
    """Another grading run held the lock for longer than the allowed wait."""


class GradingLock:
    """
    Process-wide lock serializing grading runs against the shared ledger.

    hold() waits at most timeout_s seconds, then raises GradingBusyError so
    the caller can skip the run instead of queueing behind it.
    """

    def __init__(self, timeout_s: float = 10.0):
        self.timeout_s = timeout_s
        self._lock = threading.Lock()

    @contextmanager
    def hold(self, timeout_s: Optional[float] = None) -> Iterator[None]:
        wait = self.timeout_s if timeout_s is None else timeout_s
        if not self._lock.acquire(timeout=max(0.0, wait)):
            raise GradingBusyError(f"Grading lock still held after {wait:.1f}s")
        try:
            yield
        finally:
            self._lock.release()


_default_lock = GradingLock()


def default_lock() -> GradingLock:
    """The lock shared by every grading run in this process."""
    return _default_lock
