"""
Verse API: CORS Middleware
===========================

What:  Permissive CORS for a public, read-only, GET-only API.
How:   Every response gets the CORS headers below. Any OPTIONS request is
       answered here with an empty 200, so preflights never reach routing,
       logging or application code.

Starlette's CORSMiddleware only short-circuits OPTIONS requests that carry
the full preflight header set, and answers them with an "OK" body; this
service answers every OPTIONS request, always with no body.
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Adds CORS headers and terminates OPTIONS preflights."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
