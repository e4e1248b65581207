# ABOUTME: File store for imported EPUB binaries in a single managed directory.
# ABOUTME: Enforces the filename-uniqueness policy and generates collision-free names.

import logging
from pathlib import Path

from audshelf.store.atomic import copy_file_atomic, ensure_directory
from audshelf.store.errors import (
    DirectoryUnavailableError,
    DuplicateFileError,
    FileCopyError,
    StoreFileNotFoundError,
    UnmanagedPathError,
    WriteFailureError,
)

logger = logging.getLogger(__name__)

EPUB_EXTENSION = ".epub"

_MAX_COLLISION_ATTEMPTS = 10_000


def _resolve_collision(path: Path) -> Path:
    """Find a non-colliding filename by appending _1, _2, etc."""
    stem = path.stem
    suffix = path.suffix
    parent = path.parent
    for counter in range(1, _MAX_COLLISION_ATTEMPTS + 1):
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return candidate
    raise FileCopyError(
        f"Could not find a non-colliding filename after "
        f"{_MAX_COLLISION_ATTEMPTS} attempts: {path}"
    )


class EpubFileStore:
    """Owns a flat directory of imported EPUB files.

    The directory is created lazily the first time an operation needs it.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _ensure_directory(self) -> Path:
        try:
            return ensure_directory(self.directory)
        except OSError as exc:
            raise DirectoryUnavailableError(self.directory, str(exc)) from exc

    def save_file(self, source: Path, *, allow_duplicate_names: bool = False) -> Path:
        """Copy an EPUB into the managed directory.

        Args:
            source: Path of the file to import.
            allow_duplicate_names: When True, a name collision is resolved by
                appending a numeric suffix (book_1.epub, book_2.epub, ...).
                When False, a collision is an error.

        Returns:
            Path of the stored copy.

        Raises:
            StoreFileNotFoundError: If source does not exist.
            DuplicateFileError: If the name is taken and duplicates are not allowed.
            DirectoryUnavailableError: If the managed directory cannot be created.
            FileCopyError: If the copy fails. No partial file is left behind.
        """
        if not source.is_file():
            raise StoreFileNotFoundError(source)

        directory = self._ensure_directory()
        dest = directory / source.name
        if dest.exists():
            if not allow_duplicate_names:
                raise DuplicateFileError(source.name)
            dest = _resolve_collision(dest)

        try:
            copy_file_atomic(source, dest)
        except OSError as exc:
            logger.error("Failed to copy %s to %s: %s", source, dest, exc)
            raise FileCopyError(f"Failed to copy file: {exc}") from exc

        logger.debug("Stored %s as %s", source, dest)
        return dest

    def list_files(self) -> list[Path]:
        """Return stored EPUB files, sorted by name.

        An absent or unreadable directory yields an empty list.
        """
        try:
            directory = self._ensure_directory()
            entries = list(directory.iterdir())
        except (DirectoryUnavailableError, OSError) as exc:
            logger.warning("Cannot list %s: %s", self.directory, exc)
            return []

        return sorted(
            path
            for path in entries
            if not path.name.startswith(".")
            and path.suffix.lower() == EPUB_EXTENSION
            and path.is_file()
        )

    def delete_file(self, path: Path) -> None:
        """Delete a stored file.

        Only files directly inside the managed directory are deleted.

        Raises:
            UnmanagedPathError: If path is not inside the managed directory.
            StoreFileNotFoundError: If the file does not exist.
        """
        if path.parent.resolve() != self.directory.resolve():
            raise UnmanagedPathError(path, self.directory)

        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise StoreFileNotFoundError(path) from exc
        except OSError as exc:
            raise WriteFailureError(f"Failed to delete {path}: {exc}") from exc

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def is_duplicate_name(self, name: str) -> bool:
        """Check whether a file named name is already stored, without copying."""
        return (self.directory / name).exists()
