"""FastAPI application serving the article parser."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request  # type: ignore[import-not-found]
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from starlette.exceptions import HTTPException as StarletteHTTPException

from wepar.cli import __version__

from .routes import health, parse, root
from .utils import error_body

logger = logging.getLogger(__name__)

# Sources the root page may load; inline scripts run the parse form.
CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "script-src 'self' 'unsafe-inline' https://cdn.tailwindcss.com "
        "https://cdn.jsdelivr.net",
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net "
        "https://fonts.googleapis.com",
        "font-src 'self' https://fonts.gstatic.com https://cdn.jsdelivr.net",
        "img-src 'self' data: https:",
        "connect-src 'self'",
    ]
)

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}

app = FastAPI(title="wepar", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):  # type: ignore
    """Attach security headers to every response."""

    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors with the service error envelope."""

    message = "接口不存在" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(error_body(message), status_code=exc.status_code)


@app.exception_handler(Exception)
async def server_error(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected faults behind a generic message."""

    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(error_body("服务器内部错误"), status_code=500)


app.include_router(root.router)
app.include_router(health.router)
app.include_router(parse.router)
