# ABOUTME: Book-management service: import, rename, set cover, delete, list.
# ABOUTME: Orchestrates the three stores, compensates partial failures, and reports results.

import logging
from dataclasses import dataclass
from pathlib import Path

from audshelf.core.reconciler import ReconcileResult, reconcile_library
from audshelf.formats.epub import EpubReadError, read_epub_details
from audshelf.store.catalog import CatalogStore
from audshelf.store.covers import CoverStore
from audshelf.store.errors import StorageError, StoreFileNotFoundError
from audshelf.store.files import EPUB_EXTENSION, EpubFileStore
from audshelf.store.layout import LibraryPaths, resolve_library_root
from audshelf.store.mapping import BookRecord

_logger = logging.getLogger(__name__)


@dataclass
class LibraryResult:
    """Outcome of a book-management operation.

    message is always a human-readable sentence suitable for display.
    On failure, error holds the storage exception that caused it, if any.
    """

    success: bool
    message: str
    record: BookRecord | None = None
    error: Exception | None = None


class LibraryService:
    """The seam between the presentation layer and the stores.

    Holds the stores it is given, and an in-memory copy of the catalog
    (books) that is reloaded after every successful mutation.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        files: EpubFileStore,
        covers: CoverStore,
        logger: logging.Logger | None = None,
    ) -> None:
        self.catalog = catalog
        self.files = files
        self.covers = covers
        self.logger = logger or _logger
        self.books: list[BookRecord] = []

    def startup(self) -> ReconcileResult:
        """Reconcile the catalog with disk and load it. Run before reading books."""
        result = reconcile_library(self.catalog, self.files, self.covers, self.logger)
        self.books = result.records
        return result

    def reload(self) -> list[BookRecord]:
        self.books = self.catalog.load()
        return self.books

    def list_books(self) -> list[BookRecord]:
        return self.reload()

    def get_book(self, book_id: str) -> BookRecord | None:
        return self.catalog.get(book_id)

    def _fail(self, message: str, error: Exception | None = None, **extra: str) -> LibraryResult:
        self.logger.error(message, extra=extra)
        return LibraryResult(success=False, message=message, error=error)

    def import_book(
        self, source: Path, *, allow_duplicate_names: bool = False,
    ) -> LibraryResult:
        """Copy an EPUB into the library and add its catalog record.

        The title and author come from the EPUB's metadata when it can be
        read, otherwise the title is the filename stem. If the catalog
        append fails, the copied file is deleted again.
        """
        filename = source.name

        if source.suffix.lower() != EPUB_EXTENSION:
            return self._fail(f"Not an EPUB file: {filename}")

        if not allow_duplicate_names and self.files.is_duplicate_name(filename):
            return self._fail(
                f"A file with the name '{filename}' already exists. "
                "Please rename the file or choose a different one."
            )

        try:
            saved_path = self.files.save_file(
                source, allow_duplicate_names=allow_duplicate_names,
            )
        except StorageError as exc:
            return self._fail(str(exc), exc)

        try:
            details = read_epub_details(saved_path)
            title, author = details.title, details.author
        except EpubReadError as exc:
            self.logger.debug("Using filename as title for %s: %s", filename, exc)
            title, author = source.stem, None

        record = BookRecord(title=title, author=author, source_file_path=str(saved_path))

        try:
            self.catalog.add(record)
        except StorageError as exc:
            try:
                self.files.delete_file(saved_path)
            except StorageError as cleanup_exc:
                self.logger.error(
                    "Could not remove %s after failed import: %s", saved_path, cleanup_exc,
                )
            return self._fail(f"Failed to save metadata: {exc}", exc, book_id=record.id)

        self.reload()
        return LibraryResult(
            success=True,
            message=f"EPUB imported successfully: {filename}",
            record=record,
        )

    def rename_book(self, book_id: str, new_title: str | None) -> LibraryResult:
        """Set the custom title. A blank title clears it."""
        record = self.catalog.get(book_id)
        if record is None:
            return self._fail(f"Book {book_id} not found.", book_id=book_id)

        cleaned = (new_title or "").strip()
        record.custom_title = cleaned or None

        try:
            self.catalog.update(record)
        except StorageError as exc:
            return self._fail(f"Failed to rename book: {exc}", exc, book_id=book_id)

        self.reload()
        if record.custom_title is None:
            message = f"Cleared custom title for {record.display_title}"
        else:
            message = f"Renamed book to {record.custom_title}"
        return LibraryResult(success=True, message=message, record=record)

    def set_cover(self, book_id: str, image_bytes: bytes) -> LibraryResult:
        """Store a cover image for a book and record its path.

        If the catalog update fails and the book had no cover before, the
        newly written cover is removed again.
        """
        record = self.catalog.get(book_id)
        if record is None:
            return self._fail(f"Book {book_id} not found.", book_id=book_id)

        had_cover = record.cover_image_path is not None
        try:
            cover_path = self.covers.save(book_id, image_bytes)
        except StorageError as exc:
            return self._fail(f"Failed to save cover: {exc}", exc, book_id=book_id)

        record.cover_image_path = str(cover_path)
        try:
            self.catalog.update(record)
        except StorageError as exc:
            if not had_cover:
                self.covers.delete(book_id)
            return self._fail(f"Failed to update cover: {exc}", exc, book_id=book_id)

        self.reload()
        return LibraryResult(
            success=True,
            message=f"Cover updated for {record.display_title}",
            record=record,
        )

    def delete_book(self, book_id: str) -> LibraryResult:
        """Delete a book's EPUB, cover, and catalog record, in that order.

        Failures removing the EPUB or cover are logged and do not stop the
        catalog record from being removed.
        """
        record = self.catalog.get(book_id)
        if record is None:
            return self._fail(f"Book {book_id} not found.", book_id=book_id)

        try:
            self.files.delete_file(record.source_path)
        except StoreFileNotFoundError:
            self.logger.warning(
                "EPUB for %s already missing: %s", book_id, record.source_file_path,
                extra={"book_id": book_id},
            )
        except StorageError as exc:
            self.logger.error(
                "Could not delete EPUB for %s: %s", book_id, exc,
                extra={"book_id": book_id},
            )

        self.covers.delete(book_id)

        try:
            self.catalog.delete(book_id)
        except StorageError as exc:
            return self._fail(f"Failed to delete book: {exc}", exc, book_id=book_id)

        self.reload()
        return LibraryResult(
            success=True,
            message=f"Deleted {record.display_title}",
            record=record,
        )


def build_library(
    root: Path | None = None, logger: logging.Logger | None = None,
) -> LibraryService:
    """Wire up the stores for a library root without reconciling."""
    paths = LibraryPaths(resolve_library_root(root))
    return LibraryService(
        catalog=CatalogStore(paths.catalog_path),
        files=EpubFileStore(paths.epubs_dir),
        covers=CoverStore(paths.covers_dir),
        logger=logger,
    )


def open_library(
    root: Path | None = None, logger: logging.Logger | None = None,
) -> LibraryService:
    """Build the stores for a library root and reconcile it.

    Args:
        root: Library root directory. Defaults to $AUDSHELF_LIBRARY or ~/.audshelf.
        logger: Logger handed to the service and reconciliation.

    Returns:
        A LibraryService whose books are already reconciled.
    """
    service = build_library(root, logger)
    service.startup()
    return service

