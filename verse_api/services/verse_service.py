"""
Verse API: Verse Query Service
===============================

What:  Resolves a translation code to a live data source and returns one
       uniformly random, normalized verse from it.
How:   registry check → pool lookup → single join query → normalize → record.
Who:   Called by the /get-random-verse route; holds no per-request state.

Error mapping:
    code not registered           → UnknownTranslationError (no DB access)
    registered, no live source    → TranslationUnavailableError
    query / row failure, no rows  → RetrievalError (never retried here)

Sampling:
    `ORDER BY random() LIMIT 1` over the full verses-books join gives every
    verse equal probability. SQLite scans the whole table to do it, an O(n)
    cost per request that is acceptable for one translation (~31k verses).
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from verse_api.database import DataSourcePool
from verse_api.exceptions import (
    RetrievalError,
    TranslationUnavailableError,
    UnknownTranslationError,
)
from verse_api.models.scripture import Book, Verse
from verse_api.registry import TranslationRegistry
from verse_api.schemas.verse import VerseRecord
from verse_api.services.text_normalizer import normalize_text

logger = logging.getLogger(__name__)

RANDOM_VERSE_QUERY = (
    select(
        Verse.book_number,
        Verse.chapter,
        Verse.verse,
        Verse.text,
        Book.short_name,
        Book.long_name,
    )
    .join(Book, Verse.book_number == Book.book_number)
    .order_by(func.random())
    .limit(1)
)


class VerseService:
    """
    Random-verse retrieval over a DataSourcePool.

    Both collaborators are injected so tests can substitute either one.
    Failures are local to the translation being queried: each request
    borrows only that translation's handle.
    """

    def __init__(self, registry: TranslationRegistry, pool: DataSourcePool):
        self.registry = registry
        self.pool = pool

    async def get_random_verse(self, translation: str) -> VerseRecord:
        """
        Return one random verse of `translation`.

        Raises:
            UnknownTranslationError:     code is not registered.
            TranslationUnavailableError: registered but not pooled.
            RetrievalError:              the query or row materialization failed.
        """
        if translation not in self.registry:
            raise UnknownTranslationError(translation)

        handle = self.pool.lookup(translation)
        if handle is None:
            raise TranslationUnavailableError(translation)

        try:
            # The session returns its connection to the pool on exit,
            # including when the request task is cancelled.
            async with handle.session() as session:
                result = await session.execute(RANDOM_VERSE_QUERY)
                row = result.first()
        except SQLAlchemyError as e:
            raise RetrievalError(translation, cause=e) from e

        if row is None:
            raise RetrievalError(translation, context={"cause": "query returned no rows"})

        try:
            return VerseRecord(
                translation=translation,
                book_number=row.book_number,
                book_title=row.long_name,
                book_title_short=row.short_name,
                chapter=row.chapter,
                verse=row.verse,
                text=normalize_text(row.text),
            )
        except (TypeError, ValueError) as e:
            # NULL text, non-integer keys and similar corrupted rows
            raise RetrievalError(translation, cause=e) from e
