"""
Business logic for listing stored files.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.listing.key_walker import walk_keys
from core.listing.metadata_fetcher import fetch_all_with_metadata
from core.listing.record_normalizer import build_listing_item
from core.models.record import ListingItem
from core.repositories.kv_repository import KeyValueStore

logger = Logger(utc=True)


class ListService:
    """Application service responsible for listing stored files.

    This service coordinates:
    - Walking the whole key space of the store
    - Fetching metadata for every key in bounded batches
    - Normalizing each record into a listing item
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        table_name: str | None = None,
    ) -> None:
        """Initialize list service with the key-value store."""
        self.store: KeyValueStore = store or DynamoDBKeyValueStore(table_name=table_name)

    def list_files(self, *, origin: str, cursor: str | None = None) -> list[ListingItem]:
        """List every stored file as a listing item.

        Raises:
            InvalidCursorError: If `cursor` is not a valid token
            KVStoreError: If enumeration or any metadata read fails
        """
        # Step 1: Collect key names across all pages
        keys = walk_keys(self.store, cursor)

        # Step 2: Fetch value + metadata per key, 50 at a time
        records = fetch_all_with_metadata(self.store, keys)

        # Step 3: Normalize into the public shape
        items = [
            build_listing_item(origin, record.key, record.metadata, record.value)
            for record in records
        ]

        logger.info("Files listed", extra={"count": len(items)})

        return items
