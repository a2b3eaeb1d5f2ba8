"""shardcas - Content-addressable storage on a sharded directory tree."""

__version__ = "0.1.0"

# Make key components available at package level
from .errors import (
    IntegrityError,
    ObjectNotFoundError,
    ShardCASError,
    StorageIOError,
    TextDecodingError,
)
from .identifier import compute_identifier
from .services import ContentStore, InMemoryContentStore, ShardedFileStore, TextStore

__all__ = [
    "compute_identifier",
    "ContentStore",
    "ShardedFileStore",
    "InMemoryContentStore",
    "TextStore",
    "ShardCASError",
    "ObjectNotFoundError",
    "IntegrityError",
    "StorageIOError",
    "TextDecodingError",
    "__version__",
]
