"""
Verse API: Random Verse Route
==============================

What:  GET /get-random-verse/{translation}
How:   Validates that the path addresses exactly one translation segment,
       then delegates to VerseService. Errors are raised as VerseApiError
       subclasses and rendered by the handlers registered in main.py.

Path handling:
    /get-random-verse/KJV     → KJV
    /get-random-verse/KJV/    → KJV (single trailing slash tolerated)
    /get-random-verse/        → 400
    /get-random-verse         → 400
    /get-random-verse/KJV/x   → 400
"""


from fastapi import APIRouter, Depends, Request

from verse_api.exceptions import MalformedRequestError
from verse_api.schemas.verse import ErrorResponse, VerseRecord
from verse_api.services.verse_service import VerseService

router = APIRouter(tags=["Verses"])


def get_verse_service(request: Request) -> VerseService:
    """FastAPI dependency: the VerseService owned by the running app."""
    return request.app.state.verse_service


def parse_translation_segment(path: str) -> str:
    """
    Extract the single translation segment from the remainder of the path.

    Raises:
        MalformedRequestError: zero segments, an empty segment, or more than one.
    """
    segments = path.strip("/").split("/")
    if len(segments) != 1 or not segments[0]:
        raise MalformedRequestError(context={"path": path})
    return segments[0]


_RESPONSES = {
    200: {"description": "A random verse", "model": VerseRecord},
    400: {"description": "Path does not name exactly one translation", "model": ErrorResponse},
    404: {"description": "Unknown translation", "model": ErrorResponse},
    500: {"description": "Verse retrieval failed", "model": ErrorResponse},
    503: {"description": "Translation database unavailable", "model": ErrorResponse},
}


@router.get(
    "/get-random-verse/{translation_path:path}",
    response_model=VerseRecord,
    responses=_RESPONSES,
    summary="Get a random verse from one translation",
)
async def get_random_verse(
    translation_path: str,
    service: VerseService = Depends(get_verse_service),
) -> VerseRecord:
    translation = parse_translation_segment(translation_path)
    return await service.get_random_verse(translation)


@router.get("/get-random-verse", include_in_schema=False)
async def get_random_verse_without_translation() -> None:
    raise MalformedRequestError(context={"path": ""})
