"""Utility for sharding identifiers into filesystem path segments.

Objects live two directory levels deep, keyed by the first two pairs of hex
characters, so no single directory has to hold every object.
"""

from ..errors import InvalidIdentifierError

SHARD_DEPTH = 2
SHARD_WIDTH = 2


def shard(identifier: str) -> tuple[str, ...]:
    """Split an identifier into its path segments.

    Examples:
        shard("e8d95a51f3af...") -> ("e8", "d9", "5a51f3af...")

    Args:
        identifier: Hex identifier

    Returns:
        One segment per shard level followed by the remainder

    Raises:
        InvalidIdentifierError: If there is nothing left over after sharding
    """
    prefix_len = SHARD_DEPTH * SHARD_WIDTH
    if len(identifier) <= prefix_len:
        raise InvalidIdentifierError(
            f"Identifier too short for sharding: need more than {prefix_len} chars, "
            f"got {len(identifier)}"
        )

    parts = [
        identifier[i * SHARD_WIDTH:(i + 1) * SHARD_WIDTH] for i in range(SHARD_DEPTH)
    ]
    parts.append(identifier[prefix_len:])
    return tuple(parts)


def unshard(parts: tuple[str, ...] | list[str]) -> str:
    """Rebuild an identifier from its path segments."""
    return "".join(parts)


__all__ = ["shard", "unshard", "SHARD_DEPTH", "SHARD_WIDTH"]
