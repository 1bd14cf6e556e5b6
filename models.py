# models.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text
from database import Base


def utcnow() -> datetime:
    # naive UTC, SQLite drops tzinfo on the way back anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Book(Base):
    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never handed out twice

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False)
    isbn = Column(String(32), nullable=True)
    rating = Column(Float, nullable=True)
    date_read = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Book id={self.id} title='{self.title}'>"
