"""Reader/writer lock for the node registry."""
import threading
from contextlib import contextmanager
from typing import Iterator


class RWLock:
    """Shared/exclusive lock with writer preference.

    Any number of readers may hold the lock together; a writer holds it
    alone. Once a writer is waiting, new readers queue behind it so a steady
    stream of lookups cannot starve membership changes.

    Not reentrant: a thread holding the read lock must not acquire it again
    while a writer may be waiting.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Block until the shared lock is held."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release the shared lock.

        Raises:
            RuntimeError: If no reader holds the lock
        """
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until the exclusive lock is held."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release the exclusive lock.

        Raises:
            RuntimeError: If no writer holds the lock
        """
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a held write lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @property
    def write_held(self) -> bool:
        return self._writer

    @property
    def writers_waiting(self) -> int:
        return self._writers_waiting

    def __repr__(self) -> str:
        return f"RWLock(readers={self._readers}, writer={self._writer}, writers_waiting={self._writers_waiting})"
