# Routes package init
"""
Verse API: API Routes Package
==============================

Route Inventory:
    - verses.py:  GET /get-random-verse/{translation}
    - health.py:  GET /health

Routes are thin: they extract path data, call the service and return its
result. Status codes for failures come from the exception handlers in main.py.
"""
