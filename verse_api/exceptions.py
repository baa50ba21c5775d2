"""
Verse API: Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for each failure category.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       HTTP status codes and `{"error": message}` bodies; the context is
       logged server-side only.
Who:   Raised by the registry, the data source pool and the verse service.

Exception Hierarchy:
    VerseApiError (base)
    ├── MalformedRequestError        → 400 Bad Request
    ├── UnknownTranslationError      → 404 Not Found
    ├── TranslationUnavailableError  → 503 Service Unavailable
    ├── RetrievalError               → 500 Internal Server Error
    └── InitializationError          → fatal, raised during startup only
"""

from typing import Any, Dict, Optional


class VerseApiError(Exception):
    """
    Base exception for all Verse API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MalformedRequestError(VerseApiError):
    """
    The request path does not address exactly one translation.

    HTTP: 400 Bad Request. Permanent for the same path.
    """

    def __init__(
        self,
        message: str = "Invalid URL format",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnknownTranslationError(VerseApiError):
    """
    The translation code is not in the static registry.

    HTTP: 404 Not Found. Will never succeed without a configuration change.
    """

    def __init__(
        self,
        translation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["translation"] = translation
        super().__init__(message=f"Translation '{translation}' not found", context=ctx)
        self.translation = translation


class TranslationUnavailableError(VerseApiError):
    """
    The translation is registered but has no live data source.

    When:  Its file was missing at startup or failed the liveness check.
    HTTP:  503 Service Unavailable. Stays unavailable until the process is
           restarted with a fixed deployment.
    """

    def __init__(
        self,
        translation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["translation"] = translation
        super().__init__(
            message=f"Database for translation '{translation}' is not available",
            context=ctx,
        )
        self.translation = translation


class RetrievalError(VerseApiError):
    """
    The random-verse query against one translation failed.

    When:  I/O error, corrupted row, empty verse table, missing schema.
    HTTP:  500 Internal Server Error. Transient; clients may retry.

    The message returned to the client is always generic. The translation
    and the underlying cause travel in `context` and are logged by the
    exception handler.
    """

    def __init__(
        self,
        translation: str,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["translation"] = translation
        if cause is not None:
            ctx["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message="Failed to retrieve verse", context=ctx)
        self.translation = translation
        self.cause = cause


class InitializationError(VerseApiError):
    """
    No translation could be pooled at startup.

    Fatal: raised out of the application lifespan so the server never
    begins accepting traffic.
    """

    def __init__(
        self,
        message: str = "No valid databases could be loaded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
