# Middleware package init
"""
Verse API: Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS first: OPTIONS preflights are answered before anything else runs
    2. Request ID: correlation ID available to the access log and error handlers
    3. Logging: one access-log line with status and duration
"""
