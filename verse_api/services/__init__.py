# Services package init
"""
Verse API: Services Layer
==========================

Service Inventory:
    - text_normalizer: raw stored verse text → display text (pure functions)
    - VerseService:    registry check → pool lookup → random verse → normalized record
"""
