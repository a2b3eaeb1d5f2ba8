#!/usr/bin/env python
"""Simple demo of storing objects and catching on-disk tampering."""

import tempfile

from shardcas import IntegrityError, ShardedFileStore, TextStore


def main():
    """Store a few objects, corrupt one, and show it is refused."""

    root = tempfile.mkdtemp(prefix="shardcas_demo_")
    store = ShardedFileStore(root)
    text_store = TextStore(store)

    print("=" * 60)
    print("shardcas Tamper Detection Demo")
    print("=" * 60)

    # Example 1: Store binary and text payloads
    print("\n1. Storing objects:")
    payload = b"\x00\x01\x02 binary payload"
    binary_id = store.store(payload)
    text_id = text_store.store_text("hello world")
    print(f"   binary -> {binary_id}")
    print(f"   text   -> {text_id}")
    print(f"   text object lives at {store.path_from_id(text_id)}")

    # Example 2: Storing the same content again is a no-op
    print("\n2. Idempotent store:")
    print(f"   same id again: {text_store.store_text('hello world') == text_id}")

    # Example 3: Corrupt the text object behind the store's back
    print("\n3. Tampering with the text object on disk...")
    store.path_from_id(text_id).write_bytes(b"goodbye world")
    try:
        text_store.retrieve_text(text_id)
    except IntegrityError as e:
        print(f"   refused: {e}")

    # Example 4: Audit the whole store
    print("\n4. Auditing the store:")
    print(f"   objects: {list(store.iter_ids())}")
    print(f"   corrupt: {store.verify().corrupt}")
    print(f"   binary still intact: {store.retrieve(binary_id) == payload}")


if __name__ == "__main__":
    main()
