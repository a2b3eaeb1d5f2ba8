"""In-memory content store for testing and development.

Same identifiers and error semantics as the filesystem store, but data is
lost when the process exits.
"""

import threading
from collections.abc import Iterator

from ...errors import IntegrityError, ObjectNotFoundError
from ...identifier import compute_identifier


class InMemoryContentStore:
    """Dict-backed content-addressable store.

    Thread-safe. Payloads are re-hashed on retrieve so tests can corrupt an
    entry through ``_objects`` and observe the integrity check.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._objects: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def store(self, payload: bytes) -> str:
        identifier = compute_identifier(payload)
        with self._lock:
            self._objects[identifier] = bytes(payload)
        return identifier

    def retrieve(self, identifier: str) -> bytes:
        with self._lock:
            data = self._objects.get(identifier)
        if data is None:
            raise ObjectNotFoundError(identifier)

        actual = compute_identifier(data)
        if actual != identifier:
            raise IntegrityError(identifier, actual)
        return data

    def exists(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._objects

    def iter_ids(self) -> Iterator[str]:
        """Yield stored identifiers in sorted order."""
        with self._lock:
            identifiers = sorted(self._objects)
        yield from identifiers

    def clear(self) -> None:
        """Clear all stored data (useful for tests)."""
        with self._lock:
            self._objects.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
