"""Turn an article URL or page into a renderable outcome."""

from __future__ import annotations

import logging
from typing import Callable

from bs4 import BeautifulSoup

from .article_outcome import ArticleOutcome, OutcomeStats
from .challenge import detect_challenge
from .errors import (
    ArticleError,
    ChallengeDetected,
    ExtractionEmpty,
    FetchFailure,
)
from .extraction_result import ExtractionResult
from .fallback import challenge_fallback, error_fallback
from .fetch_article import fetch_html
from .fetch_response import FetchResponse
from .images import collect_images
from .locate import extract_article

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "微信公众号文章"
PENDING_CONTENT = "<p>文章内容解析中，请稍候...</p>"

Fetcher = Callable[[str], FetchResponse]


def extract_html(html: str) -> ExtractionResult:
    """Extract the title and body from raw page markup.

    Args:
        html: Markup as fetched.

    Returns:
        Extraction result with at least one non-empty field.

    Raises:
        ChallengeDetected: The page is a verification interstitial.
        ExtractionEmpty: Neither a title nor a body was found.
    """

    # Verification pages must never be parsed as articles.
    if detect_challenge(html):
        raise ChallengeDetected("检测到验证页面")

    soup = BeautifulSoup(html, "html.parser")
    result = extract_article(soup)
    if result.is_empty:
        raise ExtractionEmpty()
    return result


def build_outcome(result: ExtractionResult) -> ArticleOutcome:
    """Assemble the caller-facing outcome from an extraction result."""

    images = collect_images(result.content)
    return ArticleOutcome(
        title=result.title or DEFAULT_TITLE,
        content=result.content or PENDING_CONTENT,
        images=images,
        stats=OutcomeStats(
            image_count=len(images), content_length=len(result.content)
        ),
    )


def _resolve(
    url: str, produce: Callable[[], ArticleOutcome]
) -> ArticleOutcome:
    """Run ``produce`` and map every failure to fallback content."""

    try:
        outcome = produce()
    except ChallengeDetected:
        logger.warning(f"Verification page detected for {url}")
        return challenge_fallback(url)
    except ArticleError as exc:
        logger.error(f"Failed to parse {url}: {exc}")
        return error_fallback(url, str(exc), exc.kind)
    except Exception as exc:  # noqa: BLE001
        logger.exception(f"Unexpected failure while parsing {url}")
        return error_fallback(
            url, str(exc) or exc.__class__.__name__, "unexpected"
        )

    logger.info(
        f"Parsed {url}: {outcome.title!r} with "
        f"{outcome.stats.image_count} images"
    )
    if outcome.images:
        logger.debug(f"First images: {outcome.images[:3]}")
    return outcome


def parse_html(html: str, url: str) -> ArticleOutcome:
    """Build an outcome from markup that was already downloaded.

    Args:
        html: Raw page markup.
        url: Address the markup came from, used in fallback content.

    Returns:
        Extracted article or fallback content; never raises.
    """

    return _resolve(url, lambda: build_outcome(extract_html(html)))


def parse_article(url: str, fetch: Fetcher | None = None) -> ArticleOutcome:
    """Download and parse an article.

    Args:
        url: Article URL, validated by the caller.
        fetch: Callable returning the page for ``url``; ``fetch_html`` by
            default.

    Returns:
        Extracted article, challenge fallback or error fallback. The call
        never raises for pages that cannot be parsed.
    """

    fetcher = fetch or fetch_html
    logger.info(f"Parsing article {url}")

    def produce() -> ArticleOutcome:
        response = fetcher(url)
        if response.status != 200:
            raise FetchFailure(f"HTTP {response.status}: 无法访问文章")
        return build_outcome(extract_html(response.text))

    return _resolve(url, produce)
