"""Storage services for shardcas."""

from .storage import ContentStore, InMemoryContentStore, ShardedFileStore, get_backend
from .text import TextStore, retrieve_text, store_text

__all__ = [
    "ContentStore",
    "ShardedFileStore",
    "InMemoryContentStore",
    "get_backend",
    "TextStore",
    "store_text",
    "retrieve_text",
]
