# ABOUTME: The BookRecord dataclass and its JSON dictionary mapping.
# ABOUTME: Handles camelCase keys, ISO 8601 timestamps, and legacy key aliases.

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Keys written by the earlier app version, mapped to their current names.
_LEGACY_KEYS = {
    "filePath": "sourceFilePath",
    "importDate": "importTimestamp",
}


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BookRecord:
    """One book in the catalog.

    The id is assigned once at creation and never changes; the cover store
    keys its blobs by it. Paths are stored as strings exactly as written,
    so a record survives a round-trip through the JSON document unchanged.
    """

    title: str
    source_file_path: str
    id: str = field(default_factory=_new_id)
    author: str | None = None
    custom_title: str | None = None
    cover_image_path: str | None = None
    import_timestamp: datetime = field(default_factory=_now)

    @property
    def filename(self) -> str:
        """Filename of the EPUB without its extension."""
        return Path(self.source_file_path).stem

    @property
    def display_title(self) -> str:
        """Custom title if set, then extracted title, then the filename."""
        if self.custom_title:
            return self.custom_title
        if self.title:
            return self.title
        return self.filename

    @property
    def source_path(self) -> Path:
        return Path(self.source_file_path)

    @property
    def cover_path(self) -> Path | None:
        return Path(self.cover_image_path) if self.cover_image_path else None


def format_timestamp(value: datetime) -> str:
    """Serialize a timestamp as ISO 8601."""
    return value.isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp. Naive values are taken to be UTC.

    Raises:
        ValueError: If the value is not a valid ISO 8601 string.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def record_to_dict(record: BookRecord) -> dict[str, Any]:
    """Convert a BookRecord to a JSON-ready dict.

    Optional fields that are None are omitted from the output.
    """
    row: dict[str, Any] = {
        "id": record.id,
        "title": record.title,
        "author": record.author,
        "customTitle": record.custom_title,
        "sourceFilePath": record.source_file_path,
        "coverImagePath": record.cover_image_path,
        "importTimestamp": format_timestamp(record.import_timestamp),
    }
    return {key: value for key, value in row.items() if value is not None}


def _optional_str(row: dict[str, Any], key: str) -> str | None:
    value = row.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _required_str(row: dict[str, Any], key: str) -> str:
    value = _optional_str(row, key)
    if value is None:
        raise ValueError(f"Missing required field '{key}'")
    return value


def dict_to_record(row: Any) -> BookRecord:
    """Convert a decoded JSON object back into a BookRecord.

    Accepts the legacy keys filePath and importDate.

    Raises:
        ValueError: If the object is not a dict or a required field is
            missing or has the wrong type.
    """
    if not isinstance(row, dict):
        raise ValueError(f"Catalog entry must be an object, got {type(row).__name__}")

    row = dict(row)
    for legacy, current in _LEGACY_KEYS.items():
        if legacy in row and current not in row:
            row[current] = row.pop(legacy)

    return BookRecord(
        id=_required_str(row, "id"),
        title=_required_str(row, "title"),
        author=_optional_str(row, "author"),
        custom_title=_optional_str(row, "customTitle"),
        source_file_path=_required_str(row, "sourceFilePath"),
        cover_image_path=_optional_str(row, "coverImagePath"),
        import_timestamp=parse_timestamp(_required_str(row, "importTimestamp")),
    )
