# ABOUTME: EPUB title and author extraction using ebooklib.
# ABOUTME: Defensive wrapper that turns any parse failure into EpubReadError.

from dataclasses import dataclass, field
from pathlib import Path

from ebooklib import epub


class EpubReadError(Exception):
    """Raised when an EPUB file cannot be read or parsed."""


@dataclass
class EpubDetails:
    """The bits of OPF metadata used to pre-fill a catalog record."""

    title: str
    authors: list[str] = field(default_factory=list)

    @property
    def author(self) -> str | None:
        """Joined author string, or None when the EPUB names no creator."""
        return ", ".join(self.authors) if self.authors else None


def _get_metadata_value(book: epub.EpubBook, namespace: str, name: str) -> str | None:
    """Extract a single metadata value from an EpubBook, or None if missing."""
    values = book.get_metadata(namespace, name)
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _get_authors(book: epub.EpubBook) -> list[str]:
    creators = book.get_metadata("DC", "creator")
    if not creators:
        return []
    return [str(entry[0]).strip() for entry in creators if entry[0]]


def read_epub_details(path: Path) -> EpubDetails:
    """Extract title and authors from an EPUB file.

    Falls back to the filename stem when the EPUB has no title.

    Raises:
        EpubReadError: If the file is missing or cannot be parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        book = epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    title = _get_metadata_value(book, "DC", "title") or path.stem
    return EpubDetails(title=title, authors=_get_authors(book))
