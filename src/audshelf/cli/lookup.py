# ABOUTME: Book id resolution for CLI arguments.
# ABOUTME: Accepts a full book id or any unambiguous prefix of one.

from audshelf.store.mapping import BookRecord


class BookLookupError(Exception):
    """Raised when a CLI book id matches no book or more than one."""


def resolve_book(books: list[BookRecord], ident: str) -> BookRecord:
    """Find the book whose id equals ident or starts with it.

    Raises:
        BookLookupError: If no book matches, or a prefix matches several.
    """
    ident = ident.strip().lower()
    for book in books:
        if book.id.lower() == ident:
            return book

    matches = [book for book in books if ident and book.id.lower().startswith(ident)]
    if not matches:
        raise BookLookupError(f"Book {ident} not found.")
    if len(matches) > 1:
        raise BookLookupError(
            f"Book id '{ident}' is ambiguous ({len(matches)} matches); use more characters."
        )
    return matches[0]
