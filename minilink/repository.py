import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    Readers arriving while a writer is waiting are held back until the
    writer has finished.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
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


class URLStore:
    """In-memory mapping of short code to original URL."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._mappings: Dict[str, str] = {}

    def put(self, code: str, original_url: str) -> None:
        # Last writer wins on an existing code.
        with self._lock.write_locked():
            self._mappings[code] = original_url

    def put_if_absent(self, code: str, original_url: str) -> bool:
        with self._lock.write_locked():
            if code in self._mappings:
                return False
            self._mappings[code] = original_url
            return True

    def get(self, code: str) -> Optional[str]:
        with self._lock.read_locked():
            return self._mappings.get(code)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._mappings)
