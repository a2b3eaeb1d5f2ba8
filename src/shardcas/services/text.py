"""UTF-8 text convenience layer over any content store."""

from ..errors import TextDecodingError
from .storage.base import ContentStore

ENCODING = "utf-8"


def store_text(store: ContentStore, text: str) -> str:
    """Encode text as UTF-8 and store it.

    Args:
        store: Any ContentStore implementation
        text: String to store

    Returns:
        Identifier of the encoded bytes
    """
    return store.store(text.encode(ENCODING))


def retrieve_text(store: ContentStore, identifier: str) -> str:
    """Retrieve an object and decode it as UTF-8.

    Args:
        store: Any ContentStore implementation
        identifier: Identifier returned by store_text() or store()

    Returns:
        Decoded string

    Raises:
        TextDecodingError: If the verified bytes are not valid UTF-8
        ObjectNotFoundError, IntegrityError, StorageIOError: From the store
    """
    data = store.retrieve(identifier)
    try:
        return data.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise TextDecodingError(identifier, str(e)) from e


class TextStore:
    """Wrap a content store to read and write strings."""

    def __init__(self, store: ContentStore):
        self.store = store

    def store_text(self, text: str) -> str:
        return store_text(self.store, text)

    def retrieve_text(self, identifier: str) -> str:
        return retrieve_text(self.store, identifier)
