# ABOUTME: Public API for the audshelf storage layer.
# ABOUTME: Exports the catalog, file store, cover store, record type, and errors.

from audshelf.store.catalog import CatalogStore
from audshelf.store.covers import CoverStore
from audshelf.store.errors import (
    CatalogWriteError,
    CoverWriteError,
    DecodeFailureError,
    DirectoryUnavailableError,
    DuplicateFileError,
    DuplicateRecordError,
    FileCopyError,
    InvalidImageError,
    RecordNotFoundError,
    StorageError,
    StoreFileNotFoundError,
    UnmanagedPathError,
    WriteFailureError,
)
from audshelf.store.files import EpubFileStore
from audshelf.store.layout import DEFAULT_LIBRARY_ROOT, LibraryPaths, resolve_library_root
from audshelf.store.mapping import BookRecord

__all__ = [
    "DEFAULT_LIBRARY_ROOT",
    "BookRecord",
    "CatalogStore",
    "CatalogWriteError",
    "CoverStore",
    "CoverWriteError",
    "DecodeFailureError",
    "DirectoryUnavailableError",
    "DuplicateFileError",
    "DuplicateRecordError",
    "EpubFileStore",
    "FileCopyError",
    "InvalidImageError",
    "LibraryPaths",
    "RecordNotFoundError",
    "StorageError",
    "StoreFileNotFoundError",
    "UnmanagedPathError",
    "WriteFailureError",
    "resolve_library_root",
]
