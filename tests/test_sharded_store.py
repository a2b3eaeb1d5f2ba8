"""Tests for the sharded filesystem store.

Covers the store/retrieve contract, on-disk layout, tamper detection and
the error taxonomy.
"""

import logging
import os
import stat
import threading

import pytest

from shardcas.errors import (
    IntegrityError,
    InvalidIdentifierError,
    ObjectNotFoundError,
    StorageIOError,
)
from shardcas.identifier import compute_identifier
from shardcas.services.storage import ContentStore, ShardedFileStore, get_backend
from shardcas.services.storage.memory import InMemoryContentStore

MISSING_ID = "0000000000000000000000000000000000000000"


class TestPathDerivation:
    def test_path_from_id(self, store, store_root):
        path = store.path_from_id("e8d95a51f3af4a3b134bf6bb680a213a")
        assert path == store_root / "e8" / "d9" / "5a51f3af4a3b134bf6bb680a213a"

    def test_no_io(self, store, store_root):
        store.path_from_id(MISSING_ID)
        assert not store_root.exists()

    def test_short_identifier(self, store):
        with pytest.raises(InvalidIdentifierError):
            store.path_from_id("abcd")


class TestStoreRetrieve:
    def test_round_trip(self, store):
        data = b"Hello, world!"
        identifier = store.store(data)
        assert store.retrieve(identifier) == data

    @pytest.mark.parametrize(
        "payload",
        [b"", b"\x00", bytes(range(256)), b"x" * 100_000],
        ids=["empty", "nul", "all-bytes", "large"],
    )
    def test_round_trip_shapes(self, store, payload):
        assert store.retrieve(store.store(payload)) == payload

    def test_returns_identifier(self, store):
        assert store.store(b"hello world") == "95d09f2b10159347eece71399a7e2e907ea3df4f"

    def test_on_disk_layout(self, store, store_root):
        """File holds exactly the payload, at root/xx/yy/rest."""
        identifier = store.store(b"hello world")
        path = store_root / "95" / "d0" / "9f2b10159347eece71399a7e2e907ea3df4f"
        assert path.is_file()
        assert path.read_bytes() == b"hello world"

    def test_root_created_lazily(self, store_root):
        store = ShardedFileStore(store_root)
        assert not store_root.exists()

        store.store(b"data")
        assert store_root.is_dir()

    def test_idempotent_store(self, store):
        first = store.store(b"same content")
        path = store.path_from_id(first)
        second = store.store(b"same content")

        assert first == second
        assert path.read_bytes() == b"same content"
        # No temp files left next to the object
        assert list(path.parent.iterdir()) == [path]

    def test_restore_repairs_corruption(self, store):
        identifier = store.store(b"precious")
        store.path_from_id(identifier).write_bytes(b"damaged")

        store.store(b"precious")
        assert store.retrieve(identifier) == b"precious"

    def test_accepts_str_root(self, tmp_path):
        store = ShardedFileStore(str(tmp_path / "objects"))
        assert store.retrieve(store.store(b"abc")) == b"abc"

    def test_concurrent_identical_stores(self, store):
        """Identical writers land on the same path and the result is intact."""
        payload = b"shared payload " * 1000
        results = []
        errors = []

        def writer():
            try:
                results.append(store.store(payload))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(set(results)) == 1
        assert store.retrieve(results[0]) == payload


class TestRetrieveErrors:
    def test_not_found(self, store):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            store.retrieve(MISSING_ID)
        assert exc_info.value.identifier == MISSING_ID
        assert str(exc_info.value) == f"Object not found: {MISSING_ID}"

    def test_not_found_is_key_error(self, store):
        with pytest.raises(KeyError):
            store.retrieve(MISSING_ID)

    def test_malformed_identifier_not_found(self, store):
        with pytest.raises(ObjectNotFoundError):
            store.retrieve("nonexistent_id")

    def test_path_traversal_not_followed(self, store, tmp_path):
        (tmp_path / "secret").write_bytes(b"secret")
        with pytest.raises(ObjectNotFoundError):
            store.retrieve("../../secret")

    def test_tamper_detection(self, store):
        identifier = store.store(b"original")
        store.path_from_id(identifier).write_bytes(b"tampered")

        with pytest.raises(IntegrityError) as exc_info:
            store.retrieve(identifier)

        assert exc_info.value.identifier == identifier
        assert exc_info.value.actual == compute_identifier(b"tampered")

    def test_mismatched_file(self, store):
        """Data planted under the wrong identifier is never served."""
        path = store.path_from_id(MISSING_ID)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"This is some test data.")

        with pytest.raises(IntegrityError):
            store.retrieve(MISSING_ID)

    def test_integrity_failure_logged(self, store, caplog):
        identifier = store.store(b"original")
        store.path_from_id(identifier).write_bytes(b"tampered")

        with caplog.at_level(logging.WARNING, logger="shardcas"):
            with pytest.raises(IntegrityError):
                store.retrieve(identifier)
        assert identifier in caplog.text

    def test_read_failure_is_io_error(self, store):
        """A directory at the object path is an I/O failure, not 'not found'."""
        identifier = compute_identifier(b"whatever")
        store.path_from_id(identifier).mkdir(parents=True)

        with pytest.raises(StorageIOError) as exc_info:
            store.retrieve(identifier)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert not isinstance(exc_info.value, (ObjectNotFoundError, IntegrityError))


class TestStoreErrors:
    def test_unusable_root(self, tmp_path):
        root = tmp_path / "not-a-dir"
        root.write_bytes(b"")
        store = ShardedFileStore(root)

        with pytest.raises(StorageIOError) as exc_info:
            store.store(b"data")
        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.path == store.path_from_id(compute_identifier(b"data"))


class TestExists:
    def test_exists(self, store):
        identifier = store.store(b"here")
        assert store.exists(identifier)
        assert not store.exists(MISSING_ID)

    def test_malformed(self, store):
        assert not store.exists("xyz")


class TestStoreFile:
    def test_store_file(self, store, tmp_path):
        source = tmp_path / "input.bin"
        source.write_bytes(b"file contents\n" * 500)

        identifier = store.store_file(source)

        assert identifier == compute_identifier(source.read_bytes())
        assert store.retrieve(identifier) == source.read_bytes()

    def test_no_temp_files_left(self, store, store_root, tmp_path):
        source = tmp_path / "input.bin"
        source.write_bytes(b"abc")
        store.store_file(source)

        assert [p for p in store_root.iterdir() if p.is_file()] == []

    def test_empty_file(self, store, tmp_path):
        source = tmp_path / "empty"
        source.write_bytes(b"")
        assert store.store_file(source) == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"

    def test_missing_source(self, store, tmp_path):
        with pytest.raises(StorageIOError):
            store.store_file(tmp_path / "missing")


class TestFileMode:
    """Objects get the same permissions as any file created under the umask."""

    @pytest.fixture
    def umask(self):
        current = os.umask(0)
        os.umask(current)
        return current

    def test_store_mode(self, store, umask):
        identifier = store.store(b"shared")
        mode = stat.S_IMODE(store.path_from_id(identifier).stat().st_mode)
        assert mode == 0o666 & ~umask

    def test_store_file_mode(self, store, umask, tmp_path):
        source = tmp_path / "input.bin"
        source.write_bytes(b"shared file")

        identifier = store.store_file(source)
        mode = stat.S_IMODE(store.path_from_id(identifier).stat().st_mode)
        assert mode == 0o666 & ~umask


class TestListing:
    def test_iter_ids(self, store, store_root):
        ids = [store.store(p) for p in (b"one", b"two", b"three")]

        # Stray files are ignored
        (store_root / "README").write_text("not an object")
        stray_dir = store.path_from_id(ids[0]).parent
        (stray_dir / ".orphan.tmp").write_bytes(b"")
        (stray_dir / "short").write_bytes(b"")

        assert list(store.iter_ids()) == sorted(ids)

    def test_iter_ids_missing_root(self, store):
        assert list(store.iter_ids()) == []

    def test_verify(self, store):
        good = store.store(b"good")
        bad = store.store(b"bad")
        store.path_from_id(bad).write_bytes(b"rotten")

        report = store.verify()
        assert report.corrupt == [bad]
        assert report.unreadable == []
        assert report.checked == 2
        assert not report.ok
        # Audit does not touch the objects
        assert store.retrieve(good) == b"good"
        assert store.path_from_id(bad).read_bytes() == b"rotten"

    def test_verify_clean(self, store):
        store.store(b"fine")
        report = store.verify()
        assert report.ok
        assert report.corrupt == []
        assert report.checked == 1

    def test_verify_continues_past_unreadable(self, store, monkeypatch):
        ids = sorted(store.store(p) for p in (b"one", b"two", b"three"))
        unreadable = ids[0]
        bad = ids[2]
        store.path_from_id(bad).write_bytes(b"rotten")
        real_retrieve = store.retrieve

        def flaky_retrieve(identifier):
            if identifier == unreadable:
                raise StorageIOError("permission denied", store.path_from_id(identifier))
            return real_retrieve(identifier)

        monkeypatch.setattr(store, "retrieve", flaky_retrieve)

        report = store.verify()
        assert report.unreadable == [unreadable]
        assert report.corrupt == [bad]
        assert report.checked == 3

    def test_verify_skips_removed_objects(self, store, monkeypatch):
        ids = sorted(store.store(p) for p in (b"one", b"two"))
        real_retrieve = store.retrieve

        def racing_retrieve(identifier):
            if identifier == ids[0]:
                raise ObjectNotFoundError(identifier)
            return real_retrieve(identifier)

        monkeypatch.setattr(store, "retrieve", racing_retrieve)

        report = store.verify()
        assert report.ok
        assert report.checked == 1


class TestBackends:
    def test_protocol(self, store):
        assert isinstance(store, ContentStore)
        assert isinstance(InMemoryContentStore(), ContentStore)

    def test_get_backend(self, store_root):
        local = get_backend("local", root_dir=store_root)
        assert isinstance(local, ShardedFileStore)
        assert local.root_dir == store_root
        assert isinstance(get_backend("memory"), InMemoryContentStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend type"):
            get_backend("s3")
