# ABOUTME: JSON-backed catalog of BookRecords with whole-document CRUD.
# ABOUTME: Every mutation loads the document, changes it in memory, and rewrites it atomically.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from audshelf.store.atomic import ensure_directory, write_bytes_atomic
from audshelf.store.errors import (
    CatalogWriteError,
    DecodeFailureError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from audshelf.store.mapping import BookRecord, dict_to_record, record_to_dict

if TYPE_CHECKING:
    from audshelf.store.files import EpubFileStore

logger = logging.getLogger(__name__)


def decode_catalog(data: bytes) -> list[BookRecord]:
    """Decode a catalog document.

    Raises:
        DecodeFailureError: If the document is not a JSON array of valid records.
    """
    try:
        payload = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeFailureError(f"Invalid catalog JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise DecodeFailureError(
            f"Catalog must be a JSON array, got {type(payload).__name__}"
        )

    try:
        return [dict_to_record(entry) for entry in payload]
    except ValueError as exc:
        raise DecodeFailureError(f"Invalid catalog entry: {exc}") from exc


def _warn_duplicate_ids(records: list[BookRecord], path: Path) -> None:
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            logger.warning("Catalog %s has more than one record with id %s", path, record.id)
        seen.add(record.id)


def encode_catalog(records: list[BookRecord]) -> bytes:
    """Encode records as a pretty-printed UTF-8 JSON array."""
    payload = [record_to_dict(record) for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


class CatalogStore:
    """Durable list of BookRecords stored as one JSON document.

    Insertion order is preserved. There are no partial updates: add,
    update, and delete each read the whole document and write it back.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[BookRecord]:
        """Read all records.

        A missing document is an empty catalog. A corrupt document is also
        treated as empty (and logged), so the library stays usable.
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("Catalog file not found at %s", self.path)
            return []
        except OSError as exc:
            logger.warning("Could not read catalog %s: %s", self.path, exc)
            return []

        try:
            records = decode_catalog(data)
        except DecodeFailureError as exc:
            logger.warning("Discarding unreadable catalog %s: %s", self.path, exc)
            return []

        _warn_duplicate_ids(records, self.path)
        logger.debug("Loaded %d record(s) from %s", len(records), self.path)
        return records

    def save(self, records: list[BookRecord]) -> None:
        """Atomically replace the catalog document with records.

        Raises:
            CatalogWriteError: If the document cannot be written.
        """
        data = encode_catalog(records)
        try:
            ensure_directory(self.path.parent)
            write_bytes_atomic(self.path, data)
        except OSError as exc:
            logger.error("Failed to save catalog %s: %s", self.path, exc)
            raise CatalogWriteError(f"Failed to save metadata: {exc}") from exc

        logger.debug("Saved %d record(s) to %s", len(records), self.path)

    def add(self, record: BookRecord) -> None:
        """Append a record to the catalog.

        Raises:
            DuplicateRecordError: If a record with record.id is already stored.
        """
        records = self.load()
        if any(existing.id == record.id for existing in records):
            raise DuplicateRecordError(record.id)
        records.append(record)
        self.save(records)

    def update(self, record: BookRecord) -> None:
        """Replace the stored record that has the same id.

        Raises:
            RecordNotFoundError: If no record has record.id.
        """
        records = self.load()
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                break
        else:
            raise RecordNotFoundError(record.id)
        self.save(records)

    def delete(self, book_id: str) -> None:
        """Remove the record with book_id. Unknown ids are a no-op."""
        records = self.load()
        remaining = [record for record in records if record.id != book_id]
        self.save(remaining)

    def get(self, book_id: str) -> BookRecord | None:
        """Retrieve a record by id."""
        for record in self.load():
            if record.id == book_id:
                return record
        return None

    def migrate_orphans(
        self,
        file_store: EpubFileStore,
        records: list[BookRecord] | None = None,
    ) -> list[BookRecord]:
        """Add a record for every stored EPUB the catalog does not know about.

        New records are titled with the filename stem and have no cover.
        Membership is checked by source_file_path, so running this twice
        adds nothing the second time.

        Args:
            file_store: The EPUB file store to scan.
            records: Records to extend and save instead of the stored
                document. The list itself is not modified.

        Returns:
            The records that were added.
        """
        records = self.load() if records is None else list(records)
        known_paths = {record.source_file_path for record in records}

        added: list[BookRecord] = []
        for path in file_store.list_files():
            file_path = str(path)
            if file_path in known_paths:
                continue
            record = BookRecord(title=path.stem, source_file_path=file_path)
            records.append(record)
            known_paths.add(file_path)
            added.append(record)

        if added:
            self.save(records)
            logger.info("Migrated %d orphan EPUB(s) into the catalog", len(added))

        return added
