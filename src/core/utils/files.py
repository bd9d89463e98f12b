"""File naming and serving-URL helpers."""

import re
import uuid
from urllib.parse import quote, urlparse

from core.utils.constants import DEFAULT_EXTENSION, RANDOM_NAME_LENGTH, SERVING_PATH

_EXTENSION_PATTERN = re.compile(r"\.([a-z0-9]+)$", re.IGNORECASE)


def extension_from_url(url: str) -> str:
    """Infer a lowercase file extension from the URL path.

    Falls back to DEFAULT_EXTENSION when the URL is not absolute or
    its path carries no alphanumeric suffix.

    Example:
        "https://x.com/pic.PNG?x=1" → "png"
        "https://x.com/pic"         → "jpg"
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return DEFAULT_EXTENSION

    if not parsed.scheme or not parsed.netloc:
        return DEFAULT_EXTENSION

    match = _EXTENSION_PATTERN.search(parsed.path)
    if match:
        return match.group(1).lower()

    return DEFAULT_EXTENSION


def random_file_name(extension: str) -> str:
    """Generate a display name for an untitled image."""
    return f"image_{uuid.uuid4().hex[:RANDOM_NAME_LENGTH]}.{extension}"


def serving_url(origin: str, key: str, *, encode: bool = True) -> str:
    """Build the link under which the file endpoint serves `key`.

    With `encode` the key is percent-encoded like a single path segment.
    """
    segment = quote(key, safe="!*'()") if encode else key
    return f"{origin}{SERVING_PATH}{segment}"
