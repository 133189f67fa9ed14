"""Utilities to turn loosely-typed tracker records into raw events.

Every parser here is best-effort: a missing or malformed field resolves to a
typed default rather than raising, so a single bad record never aborts a
conversion.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .config import FieldMapping
from .models import RawEvent

logger = logging.getLogger(__name__)

SENTINEL_TIMESTAMP = datetime.min

_FALLBACK_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%Y/%m/%d %H:%M:%S",
)


def parse_timestamp(value: Any) -> datetime:
    """Parse a timestamp into naive UTC, or return the sentinel minimum."""
    if isinstance(value, datetime):
        try:
            return _to_naive_utc(value)
        except OverflowError:
            logger.debug("Out-of-range timestamp %r; using sentinel.", value)
            return SENTINEL_TIMESTAMP
    if not isinstance(value, str) or not value.strip():
        return SENTINEL_TIMESTAMP

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _to_naive_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    logger.debug("Unparseable timestamp %r; using sentinel.", value)
    return SENTINEL_TIMESTAMP


def parse_count(value: Any) -> int:
    """Parse a non-negative counter, defaulting to 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        if not value.is_integer():
            return 0
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            logger.debug("Unparseable count %r; using 0.", value)
            return 0
    else:
        return 0
    return count if count >= 0 else 0


def parse_name(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return None
    return str(value)


def raw_event_from_record(record: Any, fields: FieldMapping) -> RawEvent:
    """Build a :class:`RawEvent` from one JSON object using ``fields``."""
    if not isinstance(record, Mapping):
        logger.debug("Non-object record %r; using defaults.", record)
        record = {}
    return RawEvent(
        application_name=parse_name(record.get(fields.app_name)),
        timestamp=parse_timestamp(record.get(fields.start_time)),
        keystrokes=parse_count(record.get(fields.keystrokes)),
        mouse_clicks=parse_count(record.get(fields.mouse_clicks)),
    )


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
