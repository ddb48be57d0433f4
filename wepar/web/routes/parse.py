"""Parse a WeChat article into editor content."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request  # type: ignore[import-not-found]
from fastapi.concurrency import run_in_threadpool  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from pydantic import BaseModel, ValidationError  # type: ignore

from wepar import parser

from ..utils import error_body, rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter()

# Bodies read through ``request.form()`` instead of as JSON.
FORM_CONTENT_TYPES = (
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)


class ParseRequest(BaseModel):
    """Input payload for the parse endpoint.

    Attributes:
        url: Link to the article. Any type is accepted so that the handler
            answers malformed values itself.
    """

    url: Any = None


async def _read_payload(request: Request) -> ParseRequest:
    """Load the payload from a JSON or form encoded body.

    Args:
        request: Incoming request.

    Returns:
        The payload; an empty one when the body is missing or unreadable.
    """

    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return ParseRequest(url=form.get("url"))

    body = await request.body()
    if not body.strip():
        return ParseRequest()
    try:
        return ParseRequest.model_validate_json(body)
    except ValidationError:
        logger.debug("Unreadable parse payload")
        return ParseRequest()


@router.post("/api/wechat/parse")
async def parse_endpoint(request: Request) -> JSONResponse:
    """Fetch and parse the article named in the request body.

    Args:
        request: Incoming request carrying ``url`` as JSON or form data.

    Returns:
        The parsed title and content, or an error envelope.
    """

    # Throttle each client before doing any network work.
    client = request.client.host if request.client else "unknown"
    if not await rate_limiter.consume(client):
        return JSONResponse(
            error_body(
                "请求过于频繁，请稍后再试",
                retryAfter=rate_limiter.retry_after,
            ),
            status_code=429,
        )

    payload = await _read_payload(request)
    if not payload.url:
        return JSONResponse(
            error_body("请提供微信公众号文章链接"), status_code=400
        )

    # Non-string links can never be article URLs.
    article = parser.ArticleRequest(
        payload.url if isinstance(payload.url, str) else ""
    )
    if not article.is_valid:
        return JSONResponse(
            error_body("请提供有效的微信公众号文章链接"), status_code=400
        )

    try:
        # The pipeline blocks on the network, keep it off the event loop.
        outcome = await run_in_threadpool(parser.parse_article, article.url)
    except Exception:  # noqa: BLE001
        logger.exception(f"API error while parsing {article.url}")
        return JSONResponse(
            error_body("服务器内部错误，请稍后重试"), status_code=500
        )

    return JSONResponse(
        {
            "success": True,
            "data": {
                "title": outcome.title,
                "content": outcome.content,
                "url": article.url,
                "parsedAt": datetime.now(timezone.utc).isoformat(),
            },
        }
    )
