# Models package init
from verse_api.models.scripture import Book, Verse

__all__ = [
    "Book",
    "Verse",
]
