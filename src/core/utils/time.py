"""
Time-related utilities for the application.

Record timestamps are stored as integer milliseconds since the Unix
epoch, the format existing records in the key-value table already use.
"""

from datetime import datetime, timezone


def utc_now_ms() -> int:
    """Return the current UTC time as epoch milliseconds.

    Example:
        1705315351123
    """
    return int(datetime.now(timezone.utc).timestamp() * 1000)
