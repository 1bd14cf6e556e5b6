# crud/book.py: the catalog store: every write is a single statement
import logging
from typing import List, Mapping, Union

import pydantic
from sqlalchemy import select, update, delete, asc, desc, case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import NotFoundError, StoreError, ValidationError
from models import Book, utcnow
from schemas import BookInput, SortMode

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "author")

BookData = Union[BookInput, Mapping]


def normalize_book_input(data: BookData) -> BookInput:
    """Turn a form/dict/BookInput into a clean BookInput or raise ValidationError.

    Shared by create and update so the two cannot drift apart.
    """
    if isinstance(data, BookInput):
        data = data.model_dump()
    try:
        book = BookInput.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise ValidationError(fields) from exc

    missing = [name for name in REQUIRED_FIELDS if not getattr(book, name)]
    if missing:
        raise ValidationError(missing, "Title and Author are required fields.")
    return book


def _order_by(mode: SortMode):
    match mode:
        case SortMode.TITLE:
            return (asc(Book.title), asc(Book.id))
        case SortMode.RATING:
            unrated_last = case((Book.rating.is_(None), 1), else_=0)
            return (unrated_last, desc(Book.rating), asc(Book.title))
        case _:
            # SQLite-compatible NULLS LAST
            undated_last = case((Book.date_read.is_(None), 1), else_=0)
            return (undated_last, desc(Book.date_read), desc(Book.created_at), desc(Book.id))


async def create_book(db: AsyncSession, data: BookData) -> Book:
    book_input = normalize_book_input(data)
    now = utcnow()
    new_book = Book(**book_input.model_dump(), created_at=now, updated_at=now)
    try:
        db.add(new_book)
        await db.commit()
        await db.refresh(new_book)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Error adding book %r", book_input.title)
        raise StoreError("Could not add book") from exc
    logger.info("Added book %s (%s)", new_book.id, new_book.title)
    return new_book


async def get_book(db: AsyncSession, book_id: int) -> Book:
    try:
        result = await db.execute(select(Book).where(Book.id == book_id))
        book = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching book %s", book_id)
        raise StoreError("Could not load book") from exc
    if book is None:
        raise NotFoundError(book_id)
    return book


async def list_books(db: AsyncSession, sort: Union[SortMode, str, None] = SortMode.RECENCY) -> List[Book]:
    mode = SortMode.parse(sort)
    try:
        result = await db.execute(select(Book).order_by(*_order_by(mode)))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Error listing books (sort=%s)", mode.value)
        raise StoreError("Could not load books") from exc


async def update_book(db: AsyncSession, book_id: int, data: BookData) -> None:
    """Overwrite every editable field; omitted optionals become NULL."""
    book_input = normalize_book_input(data)
    try:
        result = await db.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(**book_input.model_dump(), updated_at=utcnow())
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Error updating book %s", book_id)
        raise StoreError("Could not update book") from exc
    if result.rowcount == 0:
        raise NotFoundError(book_id)
    logger.info("Updated book %s", book_id)


async def delete_book(db: AsyncSession, book_id: int) -> None:
    try:
        result = await db.execute(delete(Book).where(Book.id == book_id))
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Error deleting book %s", book_id)
        raise StoreError("Could not delete book") from exc
    if result.rowcount:
        logger.info("Deleted book %s", book_id)
