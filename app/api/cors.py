# app/api/cors.py
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.api.errors import unhandled_exception_handler
from app.utils.settings import ALLOWED_ORIGINS

ALLOW_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, X-Requested-With"


def parse_allowed_origins(raw: str | None) -> list[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def resolve_origin(request_origin: str | None, allowed: list[str]) -> str:
    """
    Origin to put in Access-Control-Allow-Origin.

    No allow-list (or a "*" entry) echoes the caller; a listed caller is
    echoed; anyone else gets the first allow-listed origin.
    """
    if not request_origin:
        return "*"
    if not allowed or "*" in allowed or request_origin in allowed:
        return request_origin
    return allowed[0]


class StorefrontCORSMiddleware(BaseHTTPMiddleware):
    """Cross-origin headers for every /api route, including 204 preflights."""

    def __init__(self, app, allowed_origins: str | None = None, path_prefix: str = "/api"):
        super().__init__(app)
        self.allowed = parse_allowed_origins(ALLOWED_ORIGINS if allowed_origins is None else allowed_origins)
        self.path_prefix = path_prefix

    def _headers(self, request: Request) -> dict:
        origin = resolve_origin(request.headers.get("origin"), self.allowed)
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            # credentials only make sense with a concrete origin
            "Access-Control-Allow-Credentials": "true" if origin != "*" else "false",
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        headers = self._headers(request)
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        try:
            response = await call_next(request)
        except Exception as exc:
            # errors past the app's own handlers would otherwise leave without CORS headers
            response = await unhandled_exception_handler(request, exc)
        for name, value in headers.items():
            response.headers[name] = value
        if headers["Access-Control-Allow-Origin"] != "*":
            response.headers["Vary"] = "Origin"
        return response
