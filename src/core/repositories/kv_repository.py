"""Abstract contract for the img_url key-value store."""

from abc import ABC, abstractmethod
from typing import Any

from core.models.record import KeyListPage, StoredRecord

Metadata = dict[str, Any]


class KeyValueStore(ABC):
    """Contract for enumerating, reading and writing key-value records.

    Implementations could be DynamoDB, Redis, an in-memory dict, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def list_keys(self, *, limit: int, cursor: str | None = None) -> KeyListPage:
        """Return one page of key names.

        Args:
            limit: Maximum number of keys in the page
            cursor: Opaque token from a previous page, or None to start
                    at the beginning of the key space

        Returns:
            KeyListPage with `list_complete` set on the last page

        Raises:
            InvalidCursorError: If the cursor cannot be decoded
            KVStoreError: If the enumeration fails
        """

    @abstractmethod
    def get_with_metadata(self, key: str) -> StoredRecord | None:
        """Fetch a record's value and metadata.

        Args:
            key: Record key

        Returns:
            StoredRecord, or None if the key no longer exists

        Raises:
            KVStoreError: If the read fails
        """

    @abstractmethod
    def put(self, key: str, value: str, *, metadata: Metadata | None = None) -> None:
        """Create or overwrite a record.

        Args:
            key: Record key
            value: Text payload (may be empty)
            metadata: Optional attribute bag stored beside the key

        Raises:
            KVStoreError: If the write fails
        """
