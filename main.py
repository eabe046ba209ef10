import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from dashboard.config import settings
from dashboard.exceptions import DashboardError
from dashboard.middleware import RequestSizeLimitMiddleware, limiter
from dashboard.routes import comments, documents, health, leads, payments, sales, schema
from dashboard.services.notion import close_client as close_notion_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


class CSRFProtectionMiddleware(BaseHTTPMiddleware):
    """Validate Origin header for state-changing requests to prevent CSRF."""

    async def dispatch(self, request: Request, call_next):
        # Only check state-changing methods
        if request.method in ("POST", "PUT", "DELETE", "PATCH"):
            origin = request.headers.get("origin")
            # Allow requests without Origin (same-origin, non-browser)
            if origin and origin not in settings.cors_origins:
                return JSONResponse(
                    status_code=403,
                    content={"error": "CSRF validation failed: invalid origin"},
                )
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_notion_client()


app = FastAPI(
    title="CRM Dashboard API",
    description="Leads, sales and payments views over a Notion database",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg')}" if location else errors[0].get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(httpx.HTTPError)
async def upstream_error_handler(request: Request, exc: httpx.HTTPError):
    # Upstream details stay in the log
    logger.error(f"Upstream error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"error": "Upstream request failed"})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": f"Rate limit exceeded: {exc.detail}"})


# Rate limiter state (required by slowapi)
app.state.limiter = limiter

# Request size limit middleware (uploads are capped separately in the upload route)
app.add_middleware(RequestSizeLimitMiddleware)

# CSRF protection - validates Origin header for state-changing requests
app.add_middleware(CSRFProtectionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(leads.router, prefix="/api/leads", tags=["leads"])
app.include_router(sales.router, prefix="/api/sales", tags=["sales"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(comments.router, prefix="/api/comments", tags=["comments"])
app.include_router(documents.router, prefix="/api/documents", tags=["documents"])
app.include_router(schema.router, prefix="/api/schema", tags=["schema"])
app.include_router(health.router, prefix="/api/health", tags=["health"])
