"""
Batched, bounded-concurrency retrieval of record metadata.
"""

from concurrent.futures import ThreadPoolExecutor

from aws_lambda_powertools import Logger

from core.models.record import StoredRecord
from core.repositories.kv_repository import KeyValueStore
from core.utils.constants import METADATA_BATCH_SIZE

logger = Logger(utc=True)


def batched(keys: list[str], size: int) -> list[list[str]]:
    """Split `keys` into contiguous batches of at most `size` items."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [keys[i : i + size] for i in range(0, len(keys), size)]


def fetch_all_with_metadata(
    store: KeyValueStore,
    keys: list[str],
    *,
    batch_size: int = METADATA_BATCH_SIZE,
) -> list[StoredRecord]:
    """
    Fetch value and metadata for every key, one batch at a time.

    All reads of a batch run concurrently; the next batch starts only
    after the whole batch has finished, so at most `batch_size` reads
    are in flight. Results follow the order of `keys`. A key that
    vanished since it was listed yields a record without value or
    metadata.

    Raises:
        KVStoreError: The first failed read of a batch; the listing
                      fails as a whole
    """

    def fetch_one(key: str) -> StoredRecord:
        record = store.get_with_metadata(key)
        return record if record is not None else StoredRecord(key=key)

    records: list[StoredRecord] = []
    batches = batched(keys, batch_size)

    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for batch in batches:
            # map() yields in submission order and re-raises failures
            records.extend(executor.map(fetch_one, batch))

    logger.debug(
        "Fetched record metadata",
        extra={"count": len(records), "batches": len(batches)},
    )

    return records
