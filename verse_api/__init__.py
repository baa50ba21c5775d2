"""
Verse API: Application Package Initializer
===========================================

What: Read-only HTTP service returning a random scripture verse from one of
      several pre-loaded SQLite translations.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Verse, Normalizer)     │  ← Retrieval and text cleanup
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← ORM mapping + Pydantic
    ├─────────────────────────────────────┤
    │  Registry & DataSourcePool          │  ← One read-only engine per translation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
