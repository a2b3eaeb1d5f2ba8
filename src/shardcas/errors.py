"""Error types for shardcas.

Exceptions keep their raw fields in ``args`` and build the message in
``__str__`` so they pickle cleanly across process boundaries.
"""

from pathlib import Path


class ShardCASError(Exception):
    """Base exception for shardcas errors."""
    pass


class ObjectNotFoundError(ShardCASError, KeyError):
    """No stored object exists for the requested identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Object not found: {self.identifier}"


class IntegrityError(ShardCASError, ValueError):
    """Stored bytes no longer hash to the identifier they were requested by."""

    def __init__(self, identifier: str, actual: str):
        self.identifier = identifier
        self.actual = actual
        super().__init__(identifier, actual)

    def __str__(self) -> str:
        return f"Hash mismatch for {self.identifier}: stored content hashes to {self.actual}"


class StorageIOError(ShardCASError):
    """Filesystem failure while reading or writing an object."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(message, path)

    def __str__(self) -> str:
        return self.message


class TextDecodingError(ShardCASError, ValueError):
    """Retrieved bytes are valid content but not valid UTF-8 text."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(identifier, reason)

    def __str__(self) -> str:
        return f"Object {self.identifier} is not valid UTF-8: {self.reason}"


class InvalidIdentifierError(ShardCASError, ValueError):
    """Identifier cannot be mapped to a storage location."""
    pass


class ConfigError(ShardCASError):
    """Configuration error."""
    pass
