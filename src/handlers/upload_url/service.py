"""Business logic for ingesting external images through the Telegram bot.

Each requested URL is handed to the bot's sendPhoto call; the file id
Telegram assigns becomes the key of a metadata-only record in the
img_url store, which the file endpoint later resolves.
"""

import math
from typing import Any

import requests
from aws_lambda_powertools import Logger

from core.infrastructure.adapters.telegram_adapter import TelegramAdapterProtocol
from core.models.errors import IngestionItemError, KVStoreError
from core.repositories.kv_repository import KeyValueStore
from core.utils.constants import (
    CAPTION_MAX_LENGTH,
    MESSAGE_BOT_API_ERROR,
    MESSAGE_INVALID_BOT_RESPONSE,
    MESSAGE_INGESTION_FAILED,
    MESSAGE_INVALID_URL,
    MESSAGE_NETWORK_ERROR,
    MESSAGE_NO_FILE_ID,
    MESSAGE_PERSIST_FAILED,
    PLACEHOLDER_LABEL,
    PLACEHOLDER_LIST_TYPE,
    STORAGE_TYPE_TELEGRAM,
)
from core.utils.files import extension_from_url, random_file_name, serving_url
from core.utils.time import utc_now_ms

from .models import IngestionFailure, IngestionRequestItem, IngestionResult, IngestionSuccess

Metadata = dict[str, Any]

logger = Logger(utc=True)


def photo_size(photo: dict[str, Any]) -> int | float:
    """The variant's file_size; missing or non-numeric sizes count as 0."""
    size = photo.get("file_size")
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return 0
    return size if math.isfinite(size) else 0


def select_largest_photo(photos: Any) -> dict[str, Any] | None:
    """Pick the photo variant with the largest file_size.

    Sizes are read with photo_size. On equal sizes the earlier variant is
    kept. Returns None when there is no usable variant.

    Example:
        sizes [100, 300, 300] → the first 300
    """
    if not isinstance(photos, list):
        return None

    largest: dict[str, Any] | None = None
    for photo in photos:
        if not isinstance(photo, dict):
            continue
        if largest is None or photo_size(photo) > photo_size(largest):
            largest = photo

    return largest


class UploadUrlService:
    """Application service responsible for ingesting images by URL.

    This service orchestrates, per item:
    - URL validation and extension inference
    - The bot sendPhoto call and response parsing
    - Key and filename derivation
    - Persisting a metadata-only record
    """

    def __init__(
        self,
        *,
        bot: TelegramAdapterProtocol,
        store: KeyValueStore | None,
        base_url: str,
    ) -> None:
        self.bot = bot
        self.store = store
        self.base_url = base_url

    def process_all(self, raw_items: list[Any]) -> list[IngestionResult]:
        """Ingest items one after another; a failure never stops the batch."""
        return [self.process_item(raw) for raw in raw_items]

    def process_item(self, raw: Any) -> IngestionResult:
        """Ingest one item. Never raises; failures become IngestionFailure."""
        item = IngestionRequestItem.from_raw(raw)

        try:
            return self._ingest(item)
        except IngestionItemError as exc:
            logger.warning(
                "Ingestion failed",
                extra={"url": item.url, "error": exc.message},
            )
            return IngestionFailure(url=item.url, error=exc.message)
        except Exception as exc:
            logger.exception("Unexpected ingestion failure", extra={"url": item.url})
            return IngestionFailure(url=item.url, error=str(exc) or MESSAGE_INGESTION_FAILED)

    def _ingest(self, item: IngestionRequestItem) -> IngestionSuccess:
        # Step 1: Validate the URL
        if not item.url or not isinstance(item.url, str):
            raise IngestionItemError(message=MESSAGE_INVALID_URL)

        image_url: str = item.url
        photo_url = image_url.strip()
        title = item.title_text
        extension = extension_from_url(photo_url)

        # Step 2: Let the bot fetch the image
        result = self._send_photo(
            photo=photo_url,
            caption=title[:CAPTION_MAX_LENGTH] if title is not None else "",
        )

        # Step 3: Take the largest variant Telegram produced
        photo = select_largest_photo(result.get("photo"))
        file_id = photo.get("file_id") if photo else None
        if not file_id:
            raise IngestionItemError(message=MESSAGE_NO_FILE_ID)

        # Step 4: Derive key and display name
        key = f"{file_id}.{extension}"
        file_name = title.strip() if title is not None and title.strip() else None
        file_name = file_name or random_file_name(extension)

        # Step 5: Persist a metadata-only record
        if self.store is not None:
            self._persist(
                self.store,
                key,
                metadata={
                    "TimeStamp": utc_now_ms(),
                    "ListType": PLACEHOLDER_LIST_TYPE,
                    "Label": PLACEHOLDER_LABEL,
                    "liked": False,
                    "fileName": file_name,
                    "fileSize": photo_size(photo) if photo else 0,
                    "storageType": STORAGE_TYPE_TELEGRAM,
                    "telegramMessageId": result.get("message_id"),
                },
            )

        logger.info("Image ingested", extra={"url": image_url, "key": key})

        return IngestionSuccess(
            url=image_url,
            src=serving_url(self.base_url, key, encode=False),
            file_name=file_name,
        )

    def _send_photo(self, *, photo: str, caption: str) -> dict[str, Any]:
        """Call sendPhoto and return the `result` object of a successful reply.

        Raises:
            IngestionItemError: On network failure, a non-JSON body or an
                                API-level error
        """
        try:
            response = self.bot.send_photo(photo=photo, caption=caption)
        except requests.RequestException as exc:
            raise IngestionItemError(message=str(exc) or MESSAGE_NETWORK_ERROR) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise IngestionItemError(message=MESSAGE_INVALID_BOT_RESPONSE) from exc

        if not isinstance(data, dict):
            raise IngestionItemError(message=MESSAGE_INVALID_BOT_RESPONSE)

        result = data.get("result")
        if not data.get("ok") or not isinstance(result, dict):
            raise IngestionItemError(
                message=str(data.get("description") or MESSAGE_BOT_API_ERROR),
                details={"status": response.status_code},
            )

        return result

    @staticmethod
    def _persist(store: KeyValueStore, key: str, *, metadata: Metadata) -> None:
        try:
            store.put(key, "", metadata=metadata)
        except KVStoreError as exc:
            logger.exception("Failed to persist ingested record", extra={"key": key})
            raise IngestionItemError(
                message=MESSAGE_PERSIST_FAILED,
                details={"key": key},
            ) from exc
