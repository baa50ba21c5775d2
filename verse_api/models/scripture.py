"""
Verse API: Translation Module ORM Mapping
==========================================

What:  ORM mapping of the two tables every translation file provides.
How:   Mapped onto the shared DeclarativeBase; the same metadata describes
       all translations because each file uses the same schema.
Who:   Queried by VerseService; used by the test suite to build fixture
       databases.

Schema (MyBible module layout):
    books(book_number, short_name, long_name, ...)
    verses(book_number, chapter, verse, text)

The files ship without declared primary keys; the keys below exist only so
the ORM can identify rows. Nothing in the service ever writes through them.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from verse_api.database import Base


class Book(Base):
    """One book of a translation (e.g. 10 → "Gen" / "Genesis")."""

    __tablename__ = "books"

    book_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    short_name: Mapped[str] = mapped_column(Text, nullable=False)
    long_name: Mapped[str] = mapped_column(Text, nullable=False)


class Verse(Base):
    """
    One verse of a translation.

    `text` is raw stored text and may contain verse-number markers
    (`<S>123</S>`) and inline markup; see services.text_normalizer.
    """

    __tablename__ = "verses"

    book_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    chapter: Mapped[int] = mapped_column(Integer, primary_key=True)
    verse: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[Optional[str]] = mapped_column(Text)
