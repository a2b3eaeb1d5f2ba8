"""Storage protocol for content-addressed backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentStore(Protocol):
    """Protocol for content-addressable stores.

    Defines the contract that any backend must follow so callers, such as
    the text adapter, can swap backends without changing code.

    Implementations include:
    - ShardedFileStore: sharded directory tree on the local filesystem
    - InMemoryContentStore: dict-backed store for tests
    """

    def store(self, payload: bytes) -> str:
        """Store a payload under its content identifier.

        Args:
            payload: Raw bytes to store

        Returns:
            Identifier the payload can be retrieved with

        Raises:
            StorageIOError: If the backend cannot persist the payload
        """
        ...

    def retrieve(self, identifier: str) -> bytes:
        """Load and verify a payload.

        Args:
            identifier: Identifier returned by store()

        Returns:
            The original payload bytes

        Raises:
            ObjectNotFoundError: If nothing is stored under the identifier
            IntegrityError: If the stored bytes do not match the identifier
            StorageIOError: If the backend cannot be read
        """
        ...
