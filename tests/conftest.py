# ABOUTME: Shared pytest fixtures for audshelf tests.
# ABOUTME: Provides library stores in temp directories, EPUB files, and image bytes.

import logging
import struct
import zlib
from io import BytesIO
from pathlib import Path

import pytest
from ebooklib import epub
from PIL import Image

from audshelf.core.library import LibraryService
from audshelf.store.catalog import CatalogStore
from audshelf.store.covers import CoverStore
from audshelf.store.files import EpubFileStore
from audshelf.store.layout import LibraryPaths


@pytest.fixture(autouse=True)
def _restore_audshelf_logger():
    """Undo the level and handlers the CLI installs on the audshelf logger."""
    logger = logging.getLogger("audshelf")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture
def library_paths(tmp_path: Path) -> LibraryPaths:
    """Layout of a library rooted in a temp directory that does not exist yet."""
    return LibraryPaths(tmp_path / "library")


@pytest.fixture
def catalog(library_paths: LibraryPaths) -> CatalogStore:
    return CatalogStore(library_paths.catalog_path)


@pytest.fixture
def file_store(library_paths: LibraryPaths) -> EpubFileStore:
    return EpubFileStore(library_paths.epubs_dir)


@pytest.fixture
def cover_store(library_paths: LibraryPaths) -> CoverStore:
    return CoverStore(library_paths.covers_dir)


@pytest.fixture
def service(
    catalog: CatalogStore, file_store: EpubFileStore, cover_store: CoverStore,
) -> LibraryService:
    """A LibraryService over empty temp-directory stores, already reconciled."""
    svc = LibraryService(catalog=catalog, files=file_store, covers=cover_store)
    svc.startup()
    return svc


@pytest.fixture
def incoming_dir(tmp_path: Path) -> Path:
    """Directory outside the library that imports are copied from."""
    path = tmp_path / "incoming"
    path.mkdir()
    return path


@pytest.fixture
def sample_epub(incoming_dir: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = incoming_dir / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def plain_epub(incoming_dir: Path) -> Path:
    """An .epub file whose contents ebooklib cannot parse."""
    filepath = incoming_dir / "mybook.epub"
    filepath.write_bytes(b"not really an epub, but it has the right name")
    return filepath


def _image_bytes(fmt: str, mode: str = "RGB", color: str = "red") -> bytes:
    img = Image.new(mode, (40, 60), color)
    out = BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    return _image_bytes("PNG")


@pytest.fixture
def rgba_png_bytes() -> bytes:
    """A small PNG with an alpha channel, which JPEG cannot store as-is."""
    return _image_bytes("PNG", mode="RGBA")


@pytest.fixture
def cover_image_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """A PNG image on disk, for CLI cover tests."""
    path = tmp_path / "cover.png"
    path.write_bytes(png_bytes)
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


@pytest.fixture
def oversized_png_bytes() -> bytes:
    """A tiny PNG whose header claims 30000x30000 pixels."""
    header = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )
