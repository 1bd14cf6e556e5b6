# errors.py: what the catalog raises; routes map these to status codes
from typing import List


class CatalogError(Exception):
    """Base class for every failure the catalog reports to its caller."""


class ValidationError(CatalogError):
    def __init__(self, fields: List[str], message: str | None = None):
        self.fields = fields
        super().__init__(message or f"Missing or invalid field(s): {', '.join(fields)}")


class NotFoundError(CatalogError):
    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class StoreError(CatalogError):
    """The database failed underneath us. Not recoverable here."""
