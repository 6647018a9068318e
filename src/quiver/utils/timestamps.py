"""
Timestamp codec: Quiver stores created/updated times as integer Unix seconds.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def from_epoch(value: Any) -> datetime:
    """Decodes integer seconds since the Epoch into an aware UTC datetime."""
    if isinstance(value, datetime):
        return value
    # bool is an int subclass, and floats/strings are not valid on disk
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"timestamp must be an integer number of seconds, got {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f"timestamp out of supported range: {value}") from None


def to_epoch(value: datetime) -> int:
    """Encodes a datetime as integer seconds since the Epoch (sub-second part is dropped)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


# datetime field that reads and writes integer seconds
Timestamp = Annotated[
    datetime,
    BeforeValidator(from_epoch),
    PlainSerializer(to_epoch, return_type=int),
]
