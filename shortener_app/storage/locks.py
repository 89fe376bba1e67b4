"""
Reader/writer lock for the in-memory redirect storage.

The standard library only ships mutual-exclusion locks, so this
builds a shared/exclusive lock on top of threading.Condition.
"""

import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional


class LockTimeoutError(Exception):
    """Raised when a lock could not be acquired within the timeout"""


class ReadWriteLock:
    """
    Many readers or one writer.

    Writers are preferred: once a writer is waiting, new readers queue
    behind it so a steady stream of lookups cannot starve creation.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._writer or self._writers_waiting:
                if not self._wait(deadline):
                    return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    if not self._wait(deadline):
                        return False
                self._writer = True
                return True
            finally:
                self._writers_waiting -= 1
                # Readers blocked only by our waiting flag may proceed now
                self._cond.notify_all()

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    def _wait(self, deadline: Optional[float]) -> bool:
        """Wait for a state change; False once the deadline has passed"""
        if deadline is None:
            self._cond.wait()
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        self._cond.wait(remaining)
        return True

    @contextmanager
    def read_locked(self, timeout: Optional[float] = None) -> Iterator[None]:
        if not self.acquire_read(timeout):
            raise LockTimeoutError("could not acquire read lock")
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self, timeout: Optional[float] = None) -> Iterator[None]:
        if not self.acquire_write(timeout):
            raise LockTimeoutError("could not acquire write lock")
        try:
            yield
        finally:
            self.release_write()
