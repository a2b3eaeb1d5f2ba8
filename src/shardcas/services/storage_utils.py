"""Storage utilities for atomic writes and streamed reads."""

import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"
CHUNK_SIZE = 1024 * 1024

# NamedTemporaryFile creates 0600 files; objects get the usual umask-derived mode
_UMASK = os.umask(0)
os.umask(_UMASK)
FILE_MODE = 0o666 & ~_UMASK


def atomic_write(path: str | Path, content: bytes) -> None:
    """Write file atomically using temp file + rename.

    Readers never see a partial file: the content is written and fsynced
    under a temporary name in the target directory, then renamed over the
    destination. Parent directories are created as needed.

    Args:
        path: Target file path
        content: Bytes to write

    Raises:
        OSError: If directory creation, write or rename fails
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file must share a filesystem with the target for rename to be atomic
    with tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX, delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
            os.fchmod(tmp.fileno(), FILE_MODE)
            os.fsync(tmp.fileno())
            tmp_path.replace(path)
            logger.debug(f"Atomically wrote {len(content)} bytes to {path}")
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def is_temp_file(path: Path) -> bool:
    """Check whether a path is an in-flight temp file left by atomic_write."""
    return path.name.startswith(".") and path.name.endswith(TEMP_SUFFIX)


def iter_chunks(path: str | Path, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield a file's contents in fixed-size chunks."""
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk
