"""Read tracker JSON logs and ignore lists from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .config import FieldMapping, ReportSettings
from .errors import InputError
from .models import RawEvent
from .normalization import raw_event_from_record
from .paths import get_default_ignore_path

logger = logging.getLogger(__name__)


def parse_events(data: Any, fields: Optional[FieldMapping] = None) -> list[RawEvent]:
    """Convert a decoded JSON document into raw events."""
    if not isinstance(data, list):
        raise InputError("expected a JSON array of event records")
    if not data:
        raise InputError("no data")
    fields = fields or FieldMapping()
    return [raw_event_from_record(record, fields) for record in data]


def load_events(path: Path, fields: Optional[FieldMapping] = None) -> list[RawEvent]:
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise InputError(f"{path} is not a .json file")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InputError(f"{path} is not valid UTF-8 JSON: {exc}") from exc
    except OSError as exc:
        raise InputError(f"Cannot read {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"{path} is not valid JSON: {exc}") from exc

    events = parse_events(data, fields)
    logger.info("Loaded %d events from %s", len(events), path)
    return events


def load_ignore_list(path: Optional[Path]) -> set[str]:
    """Return the application names listed in ``path``, one per line."""
    if path is None:
        return set()
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return set()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read {path}: {exc}") from exc
    names = {line.strip() for line in text.splitlines()}
    names.discard("")
    logger.info("Ignoring %d applications listed in %s", len(names), path)
    return names


def resolve_ignore_path(
    json_path: Path, settings: Optional[ReportSettings] = None
) -> Optional[Path]:
    """Locate the ignore list beside the log, falling back to the user config."""
    settings = settings or ReportSettings()
    sibling = Path(json_path).parent / settings.ignore_file_name
    if sibling.is_file():
        return sibling
    fallback = get_default_ignore_path(settings.ignore_file_name)
    if fallback.is_file():
        return fallback
    return None
