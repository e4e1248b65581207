# ABOUTME: Exception hierarchy for the audshelf storage layer.
# ABOUTME: Every store failure is a typed StorageError the service layer can catch.

from pathlib import Path


class StorageError(Exception):
    """Base class for all catalog, file store, and cover store failures."""


class DirectoryUnavailableError(StorageError):
    """Raised when a managed directory is missing and cannot be created."""

    def __init__(self, directory: Path, reason: str = "") -> None:
        self.directory = directory
        message = f"Storage directory unavailable: {directory}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DuplicateFileError(StorageError):
    """Raised when an import would reuse a filename already in the file store."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            f"A file with the name '{filename}' already exists. "
            "Please rename the file or choose a different one."
        )


class StoreFileNotFoundError(StorageError):
    """Raised when a file to copy, delete, or locate does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class DecodeFailureError(StorageError):
    """Raised when the catalog document cannot be decoded.

    CatalogStore.load() recovers from this by returning an empty catalog,
    so it never reaches callers of the public API.
    """


class WriteFailureError(StorageError):
    """Raised when writing to disk fails. Never retried automatically."""


class CatalogWriteError(WriteFailureError):
    """Raised when the catalog document cannot be written."""


class FileCopyError(WriteFailureError):
    """Raised when an EPUB cannot be copied into the file store."""


class CoverWriteError(WriteFailureError):
    """Raised when a cover image cannot be written to the cover store."""


class RecordNotFoundError(StorageError):
    """Raised when updating a record whose id is not in the catalog."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class InvalidImageError(StorageError):
    """Raised when cover bytes cannot be decoded as an image."""


class DuplicateRecordError(StorageError):
    """Raised when adding a record whose id is already in the catalog."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} already exists")


class UnmanagedPathError(StorageError):
    """Raised when asked to delete a file outside the managed directory."""

    def __init__(self, path: Path, directory: Path) -> None:
        self.path = path
        self.directory = directory
        super().__init__(f"Refusing to delete {path}: not inside {directory}")
