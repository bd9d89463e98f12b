"""
Cursor-driven enumeration of the key-value store.
"""

from aws_lambda_powertools import Logger

from core.repositories.kv_repository import KeyValueStore
from core.utils.constants import LIST_PAGE_SIZE

logger = Logger(utc=True)


def walk_keys(
    store: KeyValueStore,
    cursor: str | None = None,
    *,
    page_size: int = LIST_PAGE_SIZE,
) -> list[str]:
    """
    Collect every key name from `cursor` to the end of the key space.

    The store is asked for pages of at most `page_size` keys, passing
    the cursor returned by the previous page, until a page reports
    that the enumeration is complete.

    Args:
        store: Key-value store to enumerate
        cursor: Opaque start token; None starts at the beginning
        page_size: Maximum keys per store call

    Returns:
        Key names in the order the store returned them

    Example:
        pages: ["a", "b"] → ["c"] (complete)

        → ["a", "b", "c"]
    """
    keys: list[str] = []
    next_cursor = cursor
    pages = 0

    while True:
        page = store.list_keys(limit=page_size, cursor=next_cursor)
        keys.extend(page.keys)
        pages += 1

        next_cursor = None if page.list_complete else page.cursor
        if not next_cursor:
            break

    logger.debug("Key walk complete", extra={"pages": pages, "count": len(keys)})

    return keys
