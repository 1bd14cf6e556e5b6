"""
Cover art for the reading log.

Covers come from the Open Library Covers API, see
https://openlibrary.org/dev/docs/api/covers

The URL is only built, never fetched: a bad ISBN simply gives a URL the
browser can't load, so no ISBN validation happens here.
"""
from typing import Optional

from schemas import Book as BookSchema, BookWithCover

COVER_URL = "https://covers.openlibrary.org/b/isbn/{isbn}-{size}.jpg"
COVER_SIZE = "M"
NO_COVER = "/images/no-cover.svg"


def resolve_cover(isbn: Optional[str]) -> str:
    """
    Builds the cover image URL for an ISBN

    Parameters
    ----------
    isbn : str or None
        Any ISBN-ish string, as stored on the book

    Returns
    -------
    str
        The medium-size Open Library cover URL, or the placeholder image
          when there is no ISBN

    """
    if not isbn:
        return NO_COVER
    return COVER_URL.format(isbn=isbn, size=COVER_SIZE)


def with_cover(book) -> BookWithCover:
    """Attach cover_url to an ORM book (or Book schema) for display."""
    data = BookSchema.model_validate(book).model_dump()
    return BookWithCover(**data, cover_url=resolve_cover(data["isbn"]))
