"""Locate the article title and body inside a parsed page."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from .extraction_result import ExtractionResult
from .normalize import normalize_markup
from .types import ContentRuleList, SelectorList

logger = logging.getLogger(__name__)

# Minimum trimmed length of a container's inner markup.
MIN_CONTENT_LENGTH = 100

# Title candidates, most specific first.
TITLE_SELECTORS: SelectorList = [
    "#activity-name",
    ".rich_media_title",
    "h1.rich_media_title",
    '[id*="title"]',
    "h1",
    "h2",
]

# Regions stripped from a candidate container before it is measured.
NOISE_SELECTOR = (
    "script, style, .comment, .share, .footer, .ad, .advertisement"
)


def has_min_length(markup: str) -> bool:
    """Whether ``markup`` is long enough to be the article body."""

    return len(markup.strip()) > MIN_CONTENT_LENGTH


# Content containers tried in order; the first accepted one wins.
CONTENT_RULES: ContentRuleList = [
    ("#js_content", has_min_length),
    (".rich_media_content", has_min_length),
    ('[id*="content"]', has_min_length),
    (".article-content", has_min_length),
    (".post-content", has_min_length),
    ("main", has_min_length),
    ("article", has_min_length),
]


def locate_title(soup: BeautifulSoup) -> str:
    """Return the first non-empty title found by ``TITLE_SELECTORS``.

    Args:
        soup: Parsed page.

    Returns:
        Trimmed title text or an empty string.
    """

    for selector in TITLE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element.get_text().strip()
        if text:
            return text
    return ""


def _strip_noise(container: Tag) -> None:
    """Remove noise regions below ``container`` in place."""

    for noise in container.select(NOISE_SELECTOR):
        # Nested matches disappear together with their ancestor.
        if not noise.decomposed:
            noise.decompose()


def _aggregate_fragments(soup: BeautifulSoup) -> str:
    """Concatenate every paragraph and image of the page.

    Paragraphs contribute their inner markup and images their own markup,
    in document order. Images inside a paragraph are only emitted once.
    """

    parts: list[str] = []
    for element in soup.find_all(["p", "img"]):
        if element.name == "p":
            parts.append(element.decode_contents())
        elif element.find_parent("p") is None:
            parts.append(str(element))
    return "".join(parts)


def locate_content(soup: BeautifulSoup) -> str:
    """Return the normalized body of the article.

    Each rule of ``CONTENT_RULES`` is tried in order: the first matching
    container has its noise removed and is accepted when its predicate
    holds. Without an accepted container, all paragraphs and images of the
    page are aggregated instead.

    Args:
        soup: Parsed page. Noise regions of inspected containers are
            removed from it.

    Returns:
        Normalized HTML fragment, empty when nothing usable was found.
    """

    for selector, accept in CONTENT_RULES:
        container = soup.select_one(selector)
        if container is None:
            continue

        _strip_noise(container)
        markup = container.decode_contents()
        if accept(markup):
            logger.debug(
                f"Content found with {selector!r}: "
                f"{len(container.find_all('img'))} images"
            )
            return normalize_markup(markup)

    logger.debug("No content container qualified; aggregating paragraphs")
    return normalize_markup(_aggregate_fragments(soup))


def extract_article(soup: BeautifulSoup) -> ExtractionResult:
    """Locate the title and the body of an article page.

    Args:
        soup: Parsed page.

    Returns:
        Extracted title and content, either of which may be empty.
    """

    return ExtractionResult(
        title=locate_title(soup), content=locate_content(soup)
    )
