"""Content identifiers for stored objects.

An identifier is the SHA-1 digest of a framing header followed by the
payload, hex encoded in lowercase. The header is ``blob <length>\\0``, the
same framing Git uses for blob objects, so identifiers match what
``git hash-object`` prints for the same bytes:

    >>> compute_identifier(b"hello world")
    '95d09f2b10159347eece71399a7e2e907ea3df4f'

Changing the tag or the algorithm changes every identifier, so both are
fixed module constants.
"""

import hashlib
import re
from collections.abc import Iterable

OBJECT_TAG = "blob"
HASH_ALGORITHM = "sha1"
IDENTIFIER_LENGTH = 40

_IDENTIFIER_RE = re.compile(rf"^[0-9a-f]{{{IDENTIFIER_LENGTH}}}$")


def frame_header(payload_length: int) -> bytes:
    """Build the framing header hashed ahead of a payload.

    Args:
        payload_length: Size of the payload in bytes

    Returns:
        Header bytes, e.g. ``b"blob 11\\x00"``
    """
    if payload_length < 0:
        raise ValueError(f"Payload length cannot be negative: {payload_length}")
    return f"{OBJECT_TAG} {payload_length}\0".encode("ascii")


def compute_identifier(payload: bytes) -> str:
    """Compute the content identifier of a payload.

    Args:
        payload: Raw bytes (any length, including empty)

    Returns:
        40-character lowercase hex identifier
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(frame_header(len(payload)))
    hasher.update(payload)
    return hasher.hexdigest()


def compute_identifier_stream(chunks: Iterable[bytes], length: int) -> str:
    """Compute an identifier for a payload delivered in chunks.

    The header needs the total length before any payload bytes are hashed,
    so the caller must know it up front (e.g. from ``stat``).

    Args:
        chunks: Payload pieces in order
        length: Total payload size in bytes

    Returns:
        Identifier equal to ``compute_identifier(b"".join(chunks))``

    Raises:
        ValueError: If the chunks do not add up to ``length``
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(frame_header(length))
    seen = 0
    for chunk in chunks:
        seen += len(chunk)
        hasher.update(chunk)
    if seen != length:
        raise ValueError(f"Expected {length} bytes, got {seen}")
    return hasher.hexdigest()


def is_identifier(value: str) -> bool:
    """Check whether a string is a well-formed identifier."""
    return bool(_IDENTIFIER_RE.match(value))


__all__ = [
    "OBJECT_TAG",
    "HASH_ALGORITHM",
    "IDENTIFIER_LENGTH",
    "frame_header",
    "compute_identifier",
    "compute_identifier_stream",
    "is_identifier",
]
