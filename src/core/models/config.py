"""Per-invocation gateway configuration."""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import (
    DEFAULT_BOT_REQUEST_TIMEOUT,
    ENV_BASIC_PASS,
    ENV_IMG_URL_TABLE_NAME,
    ENV_PUBLIC_BASE_URL,
    ENV_TELEGRAM_API_BASE_URL,
    ENV_TG_BOT_TOKEN,
    ENV_TG_CHAT_ID,
    ENV_TG_REQUEST_TIMEOUT,
    TELEGRAM_API_BASE_URL,
)


class GatewayConfig(BaseModel):
    """Secrets and bindings consumed by the gateway handlers.

    Built once per invocation and passed explicitly into services;
    nothing here is cached at module level.
    """

    model_config = ConfigDict(frozen=True)

    basic_pass: str | None = Field(None, description="Shared secret; empty disables auth")
    kv_table_name: str | None = Field(None, description="DynamoDB table backing the img_url store")
    bot_token: str | None = Field(None, description="Telegram bot token")
    chat_id: str | None = Field(None, description="Telegram chat receiving uploaded photos")
    telegram_api_base_url: str = Field(TELEGRAM_API_BASE_URL)
    public_base_url: str | None = Field(None, description="Origin used in generated links")
    bot_request_timeout: float = Field(DEFAULT_BOT_REQUEST_TIMEOUT, gt=0)

    @field_validator("telegram_api_base_url", "public_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Read configuration from the Lambda environment."""
        values: dict[str, str] = {}
        for field, env_name in (
            ("basic_pass", ENV_BASIC_PASS),
            ("kv_table_name", ENV_IMG_URL_TABLE_NAME),
            ("bot_token", ENV_TG_BOT_TOKEN),
            ("chat_id", ENV_TG_CHAT_ID),
            ("telegram_api_base_url", ENV_TELEGRAM_API_BASE_URL),
            ("public_base_url", ENV_PUBLIC_BASE_URL),
            ("bot_request_timeout", ENV_TG_REQUEST_TIMEOUT),
        ):
            raw = os.getenv(env_name)
            if raw is not None and raw.strip():
                values[field] = raw

        return cls.model_validate(values)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.basic_pass)

    @property
    def store_configured(self) -> bool:
        return bool(self.kv_table_name)

    @property
    def bot_configured(self) -> bool:
        return bool(self.bot_token) and bool(self.chat_id)
