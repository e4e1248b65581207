# ABOUTME: Startup reconciliation between the catalog and files on disk.
# ABOUTME: Repairs or clears stale cover paths and migrates orphan EPUBs into the catalog.

import logging
from dataclasses import dataclass, field
from pathlib import Path

from audshelf.store.catalog import CatalogStore
from audshelf.store.covers import CoverStore
from audshelf.store.errors import StorageError
from audshelf.store.files import EpubFileStore
from audshelf.store.mapping import BookRecord

_logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """What a reconciliation pass found and changed."""

    records: list[BookRecord] = field(default_factory=list)
    covers_cleared: list[str] = field(default_factory=list)
    covers_repaired: list[str] = field(default_factory=list)
    orphans_migrated: list[BookRecord] = field(default_factory=list)
    saved: bool = False

    @property
    def changed(self) -> bool:
        """Whether any record was repaired, cleared, or added."""
        return bool(self.covers_cleared or self.covers_repaired or self.orphans_migrated)


def _reconcile_covers(
    records: list[BookRecord],
    covers: CoverStore,
    result: ReconcileResult,
    logger: logging.Logger,
) -> None:
    """Check each stored cover path against the disk and the cover store.

    Clearing a cover when neither the stored path nor the blob for the id
    exists is lossy: the reference is dropped, not recovered.
    """
    for record in records:
        if record.cover_image_path is None:
            continue

        path_exists = Path(record.cover_image_path).is_file()
        if path_exists:
            continue

        blob_path = covers.locate(record.id)
        if blob_path is None:
            logger.warning(
                "Cover for %s missing at %s and in cover store; clearing reference",
                record.id,
                record.cover_image_path,
                extra={"book_id": record.id, "decision": "cover_cleared"},
            )
            record.cover_image_path = None
            result.covers_cleared.append(record.id)
        else:
            logger.info(
                "Cover path for %s is stale; repointing %s -> %s",
                record.id,
                record.cover_image_path,
                blob_path,
                extra={"book_id": record.id, "decision": "cover_repaired"},
            )
            record.cover_image_path = str(blob_path)
            result.covers_repaired.append(record.id)


def find_orphans(records: list[BookRecord], files: EpubFileStore) -> list[Path]:
    """Stored EPUBs whose path no record references."""
    known_paths = {record.source_file_path for record in records}
    return [path for path in files.list_files() if str(path) not in known_paths]


def reconcile_library(
    catalog: CatalogStore,
    files: EpubFileStore,
    covers: CoverStore,
    logger: logging.Logger | None = None,
) -> ReconcileResult:
    """Align the catalog with what is actually on disk.

    Steps:
    1. Load the catalog.
    2. For each record with a cover path: keep it if the file exists,
       repoint it to the cover store's location if only the blob exists,
       otherwise clear it.
    3. Save the catalog once if anything changed. A failed save is logged
       and the in-memory repair is still returned.
    4. Add records for stored EPUBs the catalog does not reference to the
       in-memory records, save them, then reload. A cover repair whose own
       save failed is written out with the new records.

    Args:
        catalog: The catalog store to reconcile.
        files: The EPUB file store to scan for orphans.
        covers: The cover store used to recover stale cover paths.
        logger: Receives one record per reconciliation decision and error.

    Returns:
        A ReconcileResult with the final records and what changed.
    """
    log = logger or _logger
    result = ReconcileResult()

    records = catalog.load()
    _reconcile_covers(records, covers, result, log)

    if result.covers_cleared or result.covers_repaired:
        try:
            catalog.save(records)
            result.saved = True
        except StorageError as exc:
            log.error(
                "Failed to save catalog after cover cleanup: %s",
                exc,
                extra={"decision": "save_failed"},
            )

    orphans = find_orphans(records, files)
    if orphans:
        log.info(
            "Found %d EPUB(s) without catalog records",
            len(orphans),
            extra={"decision": "migrate_orphans"},
        )
        try:
            result.orphans_migrated = catalog.migrate_orphans(files, records)
        except StorageError as exc:
            log.error(
                "Migration of orphan EPUBs failed: %s",
                exc,
                extra={"decision": "migrate_failed"},
            )
        else:
            if result.orphans_migrated:
                result.saved = True
                records = catalog.load()

    result.records = records
    return result
