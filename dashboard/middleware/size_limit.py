"""Request body size limit middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from dashboard.config import settings

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``max_size`` from their Content-Length.

    The default cap sits just above the upload limit so that an oversized
    upload is refused before its multipart body is buffered, while uploads
    at the limit still reach the route's own validation.
    """

    def __init__(self, app, max_size: int | None = None):
        super().__init__(app)
        self.max_size = max_size or settings.max_request_size_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if not content_length or not content_length.isdigit():
            return await call_next(request)

        size = int(content_length)
        if size > self.max_size:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: "
                f"{size} bytes exceeds {self.max_size}"
            )
            return JSONResponse(
                status_code=413,
                content={"error": f"Request body exceeds maximum size of {self.max_size} bytes"},
            )

        return await call_next(request)
