"""Download article pages while looking like a desktop browser."""

from __future__ import annotations

import logging
import os
import random

import requests  # type: ignore[import-untyped]

from .errors import FetchFailure
from .fetch_response import FetchResponse

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = float(os.environ.get("WEPAR_FETCH_TIMEOUT", "15"))
MAX_REDIRECTS = int(os.environ.get("WEPAR_MAX_REDIRECTS", "5"))
REFERER = "https://mp.weixin.qq.com/"

# Desktop browsers impersonated by the fetcher.
USER_AGENTS = [
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 "
        "Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 "
        "Safari/605.1.15"
    ),
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) "
        "Gecko/20100101 Firefox/125.0"
    ),
    (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.0.0"
    ),
]


def build_headers() -> dict[str, str]:
    """Return navigation headers with a randomly chosen user agent."""

    return {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Upgrade-Insecure-Requests": "1",
        "Referer": REFERER,
    }


def fetch_html(
    url: str,
    timeout: float | None = None,
    max_redirects: int | None = None,
) -> FetchResponse:
    """Download ``url`` and return its status and body.

    Args:
        url: Article page to download.
        timeout: Seconds before giving up, ``FETCH_TIMEOUT`` by default.
        max_redirects: Redirect hops allowed, ``MAX_REDIRECTS`` by default.

    Returns:
        The final response. Client errors (4xx) are returned normally.

    Raises:
        FetchFailure: On timeouts, too many redirects, transport errors and
            server errors (5xx).
    """

    timeout = FETCH_TIMEOUT if timeout is None else timeout
    max_redirects = MAX_REDIRECTS if max_redirects is None else max_redirects

    with requests.Session() as session:
        session.max_redirects = max_redirects
        try:
            response = session.get(
                url, headers=build_headers(), timeout=timeout
            )
        except requests.Timeout as exc:
            raise FetchFailure(f"请求超时 ({timeout}s): {exc}") from exc
        except requests.TooManyRedirects as exc:
            raise FetchFailure(f"重定向次数过多: {exc}") from exc
        except requests.RequestException as exc:
            raise FetchFailure(f"网络请求失败: {exc}") from exc

    logger.info(f"Response status for {url}: {response.status_code}")

    # Server errors are failures; client errors are left to the caller.
    if response.status_code >= 500:
        raise FetchFailure(f"HTTP {response.status_code}: 服务器错误")

    # Without a declared charset requests assumes ISO-8859-1 for text/html.
    if str(response.encoding).lower() == "iso-8859-1" and (
        "charset" not in response.headers.get("Content-Type", "").lower()
    ):
        response.encoding = "utf-8"

    return FetchResponse(status=response.status_code, text=response.text)
