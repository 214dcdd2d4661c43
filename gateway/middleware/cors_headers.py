"""
CORS headers, preflight handling and error translation for every response.

The browser client only needs one origin and three methods, so this replaces
CORSMiddleware: preflight must answer 204 for any OPTIONS request, even one
without the Access-Control-Request-* headers CORSMiddleware looks for.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from gateway.exceptions import error_message
from gateway.schemas.envelope import ErrorResponse
from gateway.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_METHODS = "GET, POST, OPTIONS"


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, allowed_origin: str):
        super().__init__(app)
        self.allowed_origin = allowed_origin

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception("Request %s %s failed", request.method, request.url.path)
                response = JSONResponse(
                    status_code=400,
                    content=ErrorResponse(error=error_message(e)).model_dump(),
                )

        response.headers["Access-Control-Allow-Origin"] = self.allowed_origin
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Content-Type"] = "application/json"
        return response
