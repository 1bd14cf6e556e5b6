from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SortMode(str, Enum):
    RECENCY = "recency"
    RATING = "rating"
    TITLE = "title"

    @classmethod
    def parse(cls, value) -> "SortMode":
        """Map any incoming value onto a known mode; unknown values mean recency."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.RECENCY


class BookInput(BaseModel):
    """What a user submits on the add and edit forms.

    Blank optional fields become None so the database stores NULL, never "".
    Blank title/author are left empty here and rejected by the store.
    """

    title: str = ""
    author: str = ""
    isbn: Optional[str] = None
    rating: Optional[float] = Field(None, allow_inf_nan=False)
    date_read: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("title", "author", mode="before")
    @classmethod
    def strip_required(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("isbn", "rating", "date_read", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, v):
        # free text is kept as written, only a blank note counts as absent
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Book(BaseModel):
    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    rating: Optional[float] = None
    date_read: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookWithCover(Book):
    cover_url: str
