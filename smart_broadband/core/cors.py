import logging
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

CORS_REJECTED_MESSAGE = "Not allowed by CORS"


class OriginGateMiddleware(BaseHTTPMiddleware):
    """Reject browser requests whose Origin is not on the allow-list.

    Requests without an Origin header (curl, Postman, server-to-server)
    pass through untouched.
    """

    def __init__(self, app, allowed_origins: list[str]) -> None:
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        return origin is None or origin in self.allowed_origins

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.warning("CORS blocked for origin: %s", origin)
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": CORS_REJECTED_MESSAGE},
            )
        return await call_next(request)
