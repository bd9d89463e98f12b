"""Thin adapter for the Telegram Bot API."""

from typing import Protocol

import requests

from core.utils.constants import DEFAULT_BOT_REQUEST_TIMEOUT, TELEGRAM_API_BASE_URL


class TelegramAdapterProtocol(Protocol):
    """Minimal bot adapter protocol (service-facing)."""

    def send_photo(self, *, photo: str, caption: str) -> requests.Response: ...


class TelegramAdapter:
    """Low-level Bot API calls (mechanical, no error handling).

    This adapter:
    - Posts form-encoded requests to the Bot API
    - Does NOT inspect the response body
    - Lets requests exceptions bubble up to the caller
    """

    def __init__(
        self,
        *,
        bot_token: str,
        chat_id: str,
        api_base_url: str = TELEGRAM_API_BASE_URL,
        timeout: float = DEFAULT_BOT_REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not bot_token or not chat_id:
            raise RuntimeError("bot_token and chat_id are required")

        self._chat_id = str(chat_id)
        self._endpoint = f"{api_base_url.rstrip('/')}/bot{bot_token}"
        self._timeout = timeout
        self._http = session or requests

    def send_photo(self, *, photo: str, caption: str) -> requests.Response:
        """Ask the bot to send `photo` (a URL) to the configured chat.

        Raises requests exceptions - handled by the ingestion service.
        """
        return self._http.post(
            f"{self._endpoint}/sendPhoto",
            data={
                "chat_id": self._chat_id,
                "photo": photo,
                "caption": caption,
            },
            timeout=self._timeout,
        )
