"""Service health route."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]

from wepar.cli import __version__

router = APIRouter()


@router.get("/api/health")
async def health() -> JSONResponse:
    """Report that the service is up."""

    return JSONResponse(
        {
            "success": True,
            "message": "微信公众号解析服务运行正常",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
