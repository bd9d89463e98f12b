"""Image Gateway Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image gateway: Telegram-backed ingestion and a DynamoDB key-value listing"
)

__all__ = ["handlers", "core"]
