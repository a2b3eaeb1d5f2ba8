"""Storage backends for shardcas."""

import logging

from .base import ContentStore
from .local import ShardedFileStore, VerificationReport
from .memory import InMemoryContentStore

logger = logging.getLogger(__name__)

BACKEND_TYPES = ("local", "memory")


def get_backend(backend_type: str = "local", **kwargs) -> ContentStore:
    """Factory function to get a specific storage backend.

    Args:
        backend_type: One of "local", "memory"
        **kwargs: Backend-specific configuration

    Returns:
        Storage backend instance

    Raises:
        ValueError: If backend_type is unknown

    Examples:
        >>> backend = get_backend("local", root_dir="/tmp/objects")
        >>> backend = get_backend("memory")
    """
    if backend_type == "local":
        backend = ShardedFileStore(**kwargs)
    elif backend_type == "memory":
        backend = InMemoryContentStore(**kwargs)
    else:
        raise ValueError(f"Unknown backend type: {backend_type}. Must be one of: {BACKEND_TYPES}")

    logger.debug(f"Using {backend_type} storage backend")
    return backend


__all__ = [
    "BACKEND_TYPES",
    "ContentStore",
    "ShardedFileStore",
    "InMemoryContentStore",
    "VerificationReport",
    "get_backend",
]
