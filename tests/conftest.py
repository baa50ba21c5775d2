"""
Verse API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Translation modules are real SQLite files built in tmp_path through
       the ORM metadata, so the pool, the service and the routes run against
       the same driver stack as production.

Fixture Hierarchy (all function-scoped):
    translation_files: KJV (5 verses), RST (3 verses, Cyrillic),
                       BROKEN (verses but no books table)
    registry:          those three plus NIV, whose file does not exist
    pool:              initialized DataSourcePool over `registry`
    test_client:       HTTPX AsyncClient bound to create_app(pool=pool)
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
os.environ["ASSETS_DIR"] = tempfile.mkdtemp(prefix="verse_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine

from verse_api.database import Base, DataSourcePool
from verse_api.models.scripture import Book, Verse
from verse_api.registry import TranslationRegistry


KJV_BOOKS = [
    {"book_number": 10, "short_name": "Gen", "long_name": "Genesis"},
    {"book_number": 470, "short_name": "Mat", "long_name": "Matthew"},
    {"book_number": 500, "short_name": "John", "long_name": "John"},
]

KJV_VERSES = [
    {"book_number": 10, "chapter": 1, "verse": 1,
     "text": '<S>1</S>In the <a href="x">beginning</a>  God created the heaven and the earth.'},
    {"book_number": 10, "chapter": 1, "verse": 2,
     "text": "And the earth was without form, and void;<pb/> and darkness was upon the face of the deep."},
    {"book_number": 470, "chapter": 5, "verse": 9,
     "text": "Blessed <i>are</i> the peacemakers: for they shall be called the children of God."},
    {"book_number": 500, "chapter": 3, "verse": 16,
     "text": "<J>For God so loved the world, that he gave his only begotten Son</J>\n\t& more"},
    {"book_number": 500, "chapter": 11, "verse": 35,
     "text": "  Jesus <S>1145</S>wept.  "},
]

RST_BOOKS = [
    {"book_number": 10, "short_name": "Быт", "long_name": "Бытие"},
]

RST_VERSES = [
    {"book_number": 10, "chapter": 1, "verse": 1, "text": "В начале сотворил Бог небо и землю."},
    {"book_number": 10, "chapter": 1, "verse": 2, "text": "Земля же была безвидна и пуста,"},
    {"book_number": 10, "chapter": 1, "verse": 3, "text": "И сказал Бог: да будет свет."},
]


def build_translation_db(
    path: Path,
    books: Optional[List[dict]] = None,
    verses: Optional[List[dict]] = None,
    with_books_table: bool = True,
) -> Path:
    """Write a translation module with the production schema to `path`."""
    engine = create_engine(f"sqlite:///{path}")
    tables = [Verse.__table__]
    if with_books_table:
        tables.append(Book.__table__)
    Base.metadata.create_all(engine, tables=tables)
    with engine.begin() as conn:
        if with_books_table and books:
            conn.execute(Book.__table__.insert(), books)
        if verses:
            conn.execute(Verse.__table__.insert(), verses)
    engine.dispose()
    return path


@pytest.fixture
def translation_files(tmp_path) -> Dict[str, Path]:
    return {
        "KJV": build_translation_db(tmp_path / "KJV+.Sqlite3", KJV_BOOKS, KJV_VERSES),
        "RST": build_translation_db(tmp_path / "RST+.Sqlite3", RST_BOOKS, RST_VERSES),
        "BROKEN": build_translation_db(
            tmp_path / "BROKEN.Sqlite3", verses=KJV_VERSES, with_books_table=False,
        ),
    }


@pytest.fixture
def registry(tmp_path, translation_files) -> TranslationRegistry:
    locations = dict(translation_files)
    locations["NIV"] = tmp_path / "NIV+.Sqlite3"  # never created
    return TranslationRegistry(locations)


@pytest_asyncio.fixture
async def pool(registry):
    """An initialized pool; shut down after the test."""
    data_sources = DataSourcePool(registry, pool_size=2, max_overflow=3, pool_timeout=5)
    await data_sources.initialize()
    yield data_sources
    await data_sources.shutdown()


@pytest_asyncio.fixture
async def test_client(pool):
    """
    HTTPX AsyncClient routed straight to the app.

    ASGITransport does not run the lifespan; the `pool` fixture has
    already initialized the data sources.
    """
    from verse_api.main import create_app
    app = create_app(pool=pool)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
