"""
Verse API: Pydantic Response Schemas
=====================================

What:  Pydantic models defining the JSON contract of the service.
How:   FastAPI serializes route return values through these models and
       documents them in the OpenAPI schema. Field order here is the key
       order clients see.
"""

from typing import List

from pydantic import BaseModel, Field


class VerseRecord(BaseModel):
    """
    One randomly selected verse with its bibliographic location.

    Built per request by VerseService; never persisted.
    """
    translation: str = Field(description="Translation code, e.g. KJV")
    book_number: int = Field(description="Book number as stored in the translation module")
    book_title: str = Field(description="Long book title, e.g. Genesis")
    book_title_short: str = Field(description="Short book title, e.g. Gen")
    chapter: int = Field(description="Chapter number")
    verse: int = Field(description="Verse number within the chapter")
    text: str = Field(description="Normalized verse text")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(default="ok", description="Always 'ok' while the process serves traffic")
    translations: List[str] = Field(description="Translations with a live data source, unordered")


class ErrorResponse(BaseModel):
    """
    Error body shared by every non-2xx response.

    Example:
        {"error": "Translation 'XYZ' not found"}
    """
    error: str = Field(description="Human-readable error description")
