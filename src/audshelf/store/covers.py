# ABOUTME: Cover image store keyed by book id, one JPEG blob per book.
# ABOUTME: Re-encodes incoming image bytes with Pillow and writes them atomically.

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from audshelf.store.atomic import ensure_directory, write_bytes_atomic
from audshelf.store.errors import (
    CoverWriteError,
    DirectoryUnavailableError,
    InvalidImageError,
)

logger = logging.getLogger(__name__)

COVER_EXTENSION = ".jpg"
DEFAULT_JPEG_QUALITY = 80


def encode_cover(image_bytes: bytes, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Decode arbitrary image bytes and re-encode them as an RGB JPEG.

    Raises:
        InvalidImageError: If the bytes are not a decodable image, or claim
            more pixels than Pillow's decompression-bomb limit allows.
    """
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            img.load()
            rgb = img.convert("RGB")
    except Image.DecompressionBombError as exc:
        raise InvalidImageError(f"Image too large: {exc}") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise InvalidImageError("Invalid image data") from exc

    out = BytesIO()
    rgb.save(out, format="JPEG", quality=quality)
    return out.getvalue()


class CoverStore:
    """Owns one optional cover image per book id.

    A cover lives at <directory>/<book_id>.jpg. Because the filename is
    derived from the id alone, a cover can always be found again by id
    even if the path recorded in the catalog has gone stale.
    """

    def __init__(self, directory: Path, *, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self.directory = directory
        self.quality = quality

    def _path_for(self, book_id: str) -> Path:
        return self.directory / f"{book_id}{COVER_EXTENSION}"

    def save(self, book_id: str, image_bytes: bytes) -> Path:
        """Encode and store a cover, replacing any previous one for book_id.

        Returns:
            Path of the stored cover.

        Raises:
            InvalidImageError: If image_bytes cannot be decoded.
            DirectoryUnavailableError: If the covers directory cannot be created.
            CoverWriteError: If the file cannot be written.
        """
        data = encode_cover(image_bytes, self.quality)

        try:
            ensure_directory(self.directory)
        except OSError as exc:
            raise DirectoryUnavailableError(self.directory, str(exc)) from exc

        path = self._path_for(book_id)
        try:
            write_bytes_atomic(path, data)
        except OSError as exc:
            logger.error("Failed to write cover for %s: %s", book_id, exc)
            raise CoverWriteError(f"Failed to save cover image: {exc}") from exc

        return path

    def locate(self, book_id: str) -> Path | None:
        """Return the cover path for book_id, or None if it has no cover."""
        path = self._path_for(book_id)
        return path if path.is_file() else None

    def delete(self, book_id: str) -> None:
        """Remove the cover for book_id if present. Failures are logged, not raised."""
        path = self._path_for(book_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete cover %s: %s", path, exc)

    def exists(self, book_id: str) -> bool:
        return self.locate(book_id) is not None
