"""Sharded filesystem store.

Objects are laid out as ``<root>/xx/yy/<rest>`` where ``xx`` and ``yy`` are
the first two character pairs of the identifier. Files hold the exact
payload bytes; nothing else is persisted.
"""

import logging
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ...errors import IntegrityError, ObjectNotFoundError, StorageIOError
from ...identifier import compute_identifier, compute_identifier_stream, is_identifier
from ...utils.shard import SHARD_WIDTH, shard, unshard
from ..storage_utils import FILE_MODE, TEMP_SUFFIX, atomic_write, is_temp_file, iter_chunks

logger = logging.getLogger(__name__)


class ShardedFileStore:
    """Content-addressable store on the local filesystem.

    The store holds nothing but its root path. The root is not created or
    checked here; a missing or unwritable root surfaces on the first write.

    Writes go through a temp file and rename, so a concurrent reader sees
    either the complete object or no object. Storing the same content twice
    rewrites the same bytes at the same path.
    """

    def __init__(self, root_dir: str | Path):
        """Initialize store.

        Args:
            root_dir: Directory all objects live under
        """
        self.root_dir = Path(root_dir)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root_dir)!r})"

    def path_from_id(self, identifier: str) -> Path:
        """Map an identifier to its object path (no I/O).

        Args:
            identifier: Hex identifier, at least 5 characters

        Returns:
            ``root_dir / xx / yy / rest``
        """
        return self.root_dir.joinpath(*shard(identifier))

    def store(self, payload: bytes) -> str:
        """Store payload and return its identifier."""
        identifier = compute_identifier(payload)
        path = self.path_from_id(identifier)

        try:
            atomic_write(path, payload)
        except OSError as e:
            raise StorageIOError(f"Failed to store object {identifier} at {path}: {e}", path) from e

        logger.debug(f"Stored {len(payload)} bytes as {identifier}")
        return identifier

    def retrieve(self, identifier: str) -> bytes:
        """Read an object and verify it still hashes to its identifier."""
        if not is_identifier(identifier):
            raise ObjectNotFoundError(identifier)

        path = self.path_from_id(identifier)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(identifier) from None
        except OSError as e:
            raise StorageIOError(f"Failed to read object {identifier} at {path}: {e}", path) from e

        actual = compute_identifier(data)
        if actual != identifier:
            logger.warning(f"Integrity check failed for {identifier} (content hashes to {actual})")
            raise IntegrityError(identifier, actual)

        logger.debug(f"Retrieved {len(data)} bytes for {identifier}")
        return data

    def exists(self, identifier: str) -> bool:
        """Check if an object file exists (contents are not verified)."""
        if not is_identifier(identifier):
            return False
        return self.path_from_id(identifier).is_file()

    def store_file(self, source: str | Path) -> str:
        """Stream a file into the store without loading it whole.

        The file is hashed while being copied to a temp file under the root,
        then renamed into its sharded location.

        Args:
            source: File to store

        Returns:
            Identifier of the file's contents

        Raises:
            StorageIOError: If the source cannot be read, changes size while
                being copied, or the object cannot be written
        """
        source = Path(source)
        try:
            length = source.stat().st_size
            self.root_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.root_dir, prefix=".incoming.", suffix=TEMP_SUFFIX, delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                try:
                    identifier = compute_identifier_stream(
                        _tee(iter_chunks(source), tmp), length
                    )
                    tmp.flush()
                    os.fchmod(tmp.fileno(), FILE_MODE)
                    os.fsync(tmp.fileno())
                except BaseException:
                    tmp_path.unlink(missing_ok=True)
                    raise

            path = self.path_from_id(identifier)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.replace(path)
            except BaseException:
                tmp_path.unlink(missing_ok=True)
                raise
        except ValueError as e:
            raise StorageIOError(f"File {source} changed while being stored: {e}", source) from e
        except OSError as e:
            raise StorageIOError(f"Failed to store file {source}: {e}", source) from e

        logger.debug(f"Stored file {source} ({length} bytes) as {identifier}")
        return identifier

    def iter_ids(self) -> Iterator[str]:
        """Yield the identifier of every object under the root, in sorted order.

        Only files sitting in the sharded layout with a well-formed name are
        reported; temp files and anything else are skipped.
        """
        if not self.root_dir.is_dir():
            return

        for first in sorted(self.root_dir.iterdir()):
            if not _is_shard_dir(first):
                continue
            for second in sorted(first.iterdir()):
                if not _is_shard_dir(second):
                    continue
                for obj in sorted(second.iterdir()):
                    if not obj.is_file() or is_temp_file(obj):
                        continue
                    identifier = unshard((first.name, second.name, obj.name))
                    if is_identifier(identifier):
                        yield identifier

    def verify(self) -> "VerificationReport":
        """Re-hash every stored object.

        Objects that cannot be read are recorded and the scan continues;
        objects removed while the scan runs are skipped. Nothing is repaired
        or removed.

        Returns:
            VerificationReport with sorted corrupt and unreadable identifiers
        """
        report = VerificationReport()
        for identifier in self.iter_ids():
            try:
                self.retrieve(identifier)
            except IntegrityError:
                report.corrupt.append(identifier)
            except ObjectNotFoundError:
                logger.debug(f"Object {identifier} disappeared during verification")
                continue
            except StorageIOError as e:
                logger.warning(f"Could not read {identifier}: {e}")
                report.unreadable.append(identifier)
            report.checked += 1

        logger.info(
            f"Verified {report.checked} objects under {self.root_dir}, "
            f"{len(report.corrupt)} corrupt, {len(report.unreadable)} unreadable"
        )
        return report


@dataclass
class VerificationReport:
    """Outcome of ShardedFileStore.verify."""

    checked: int = 0
    corrupt: list[str] = field(default_factory=list)
    unreadable: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.corrupt and not self.unreadable


def _is_shard_dir(path: Path) -> bool:
    return len(path.name) == SHARD_WIDTH and path.is_dir()


def _tee(chunks: Iterator[bytes], sink) -> Iterator[bytes]:
    for chunk in chunks:
        sink.write(chunk)
        yield chunk
