"""Failures raised inside the parsing pipeline."""

from __future__ import annotations

EMPTY_CONTENT_MESSAGE = "未找到有效的文章内容"


class ArticleError(Exception):
    """Base class for failures that end in fallback content."""

    kind = "unexpected"


class ChallengeDetected(ArticleError):
    """The fetched page is an anti-automation interstitial."""

    kind = "challenge"


class FetchFailure(ArticleError):
    """The page could not be retrieved.

    Covers transport errors, timeouts, redirect limits and server errors.
    """

    kind = "fetch"


class ExtractionEmpty(ArticleError):
    """Neither a title nor a body could be located."""

    kind = "empty"

    def __init__(self, message: str = EMPTY_CONTENT_MESSAGE) -> None:
        super().__init__(message)
