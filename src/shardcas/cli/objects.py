"""Object CLI commands: store, fetch, hash and audit objects."""

import sys
from pathlib import Path
from typing import List, Optional

import typer

from ..errors import IntegrityError, ObjectNotFoundError, ShardCASError, TextDecodingError
from ..identifier import compute_identifier_stream
from ..services.storage.retry import call_with_retry
from ..services.storage_utils import iter_chunks
from ..services.text import retrieve_text, store_text
from .common_options import input_files_argument, root_option
from .display import error, info, success, warning
from .utils import open_store


def put(
    files: List[Path] = input_files_argument(),
    root: Optional[Path] = root_option(),
):
    """Store files and print their identifiers.

    Example:
        shardcas put report.pdf data.csv
    """
    store = open_store(root)
    for file in files:
        try:
            identifier = call_with_retry(store.store_file, file)
        except ShardCASError as e:
            error(f"Failed to store {file}: {e}")
            raise typer.Exit(1)
        print(f"{identifier}  {file}")


def put_text(
    text: str = typer.Argument(..., help="Text to store as UTF-8"),
    root: Optional[Path] = root_option(),
):
    """Store a string and print its identifier."""
    store = open_store(root)
    try:
        identifier = call_with_retry(store_text, store, text)
    except ShardCASError as e:
        error(f"Failed to store text: {e}")
        raise typer.Exit(1)
    print(identifier)


def get(
    identifier: str = typer.Argument(..., help="Object identifier"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to file instead of stdout", dir_okay=False
    ),
    text: bool = typer.Option(False, "--text", "-t", help="Decode the object as UTF-8 text"),
    root: Optional[Path] = root_option(),
):
    """Retrieve a verified object.

    Fails without printing anything if the stored bytes no longer match the
    identifier.
    """
    store = open_store(root)
    try:
        if text:
            data = retrieve_text(store, identifier).encode("utf-8")
        else:
            data = store.retrieve(identifier)
    except ObjectNotFoundError as e:
        error(str(e))
        raise typer.Exit(1)
    except IntegrityError as e:
        error(f"Integrity check failed: {e}")
        raise typer.Exit(1)
    except TextDecodingError as e:
        error(str(e))
        info("Retrieve without --text to get the raw bytes")
        raise typer.Exit(1)
    except ShardCASError as e:
        error(f"Failed to retrieve {identifier}: {e}")
        raise typer.Exit(1)

    if output:
        output.write_bytes(data)
        success(f"Wrote {len(data)} bytes to {output}")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def hash_files(files: List[Path] = input_files_argument()):
    """Print identifiers for files without storing them."""
    for file in files:
        try:
            identifier = compute_identifier_stream(iter_chunks(file), file.stat().st_size)
        except (OSError, ValueError) as e:
            error(f"Failed to hash {file}: {e}")
            raise typer.Exit(1)
        print(f"{identifier}  {file}")


def path(
    identifier: str = typer.Argument(..., help="Object identifier"),
    root: Optional[Path] = root_option(),
):
    """Show where an object is (or would be) stored."""
    store = open_store(root)
    try:
        print(store.path_from_id(identifier))
    except ShardCASError as e:
        error(str(e))
        raise typer.Exit(1)


def ls(root: Optional[Path] = root_option()):
    """List identifiers of stored objects."""
    store = open_store(root)
    for identifier in store.iter_ids():
        print(identifier)


def verify(root: Optional[Path] = root_option()):
    """Re-hash every stored object and report corruption."""
    store = open_store(root)
    try:
        report = store.verify()
    except ShardCASError as e:
        error(f"Verification aborted: {e}")
        raise typer.Exit(1)

    for identifier in report.corrupt:
        warning(f"Corrupt: {identifier} ({store.path_from_id(identifier)})")
    for identifier in report.unreadable:
        warning(f"Unreadable: {identifier} ({store.path_from_id(identifier)})")

    if not report.ok:
        error(
            f"{len(report.corrupt)} corrupt and {len(report.unreadable)} unreadable "
            f"object(s) under {store.root_dir}"
        )
        raise typer.Exit(1)

    success(f"All {report.checked} objects under {store.root_dir} verified")
