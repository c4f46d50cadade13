"""
Utility functions and helpers
"""

import logging
from datetime import datetime, timezone
from typing import Union

logger = logging.getLogger(__name__)

def parse_db_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse a timestamp read back from storage into an aware UTC datetime"""
    if isinstance(value, datetime):
        timestamp = value
    else:
        timestamp_str = value.strip()
        # Handle ISO format with 'Z' (UTC)
        if timestamp_str.endswith('Z'):
            timestamp_str = timestamp_str[:-1] + '+00:00'
        # SQLite CURRENT_TIMESTAMP uses a space separator
        timestamp = datetime.fromisoformat(timestamp_str.replace(' ', 'T', 1))

    # Storage engines hand back naive UTC values
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)
