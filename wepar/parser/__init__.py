"""Parser package for WeChat articles."""

from .article_outcome import ArticleOutcome, OutcomeStats
from .article_request import ArticleRequest
from .errors import (
    ArticleError,
    ChallengeDetected,
    ExtractionEmpty,
    FetchFailure,
)
from .extraction_result import ExtractionResult
from .fetch_article import fetch_html
from .normalize import normalize_markup
from .parse_article import parse_article, parse_html

__all__ = [
    "ArticleError",
    "ArticleOutcome",
    "ArticleRequest",
    "ChallengeDetected",
    "ExtractionEmpty",
    "ExtractionResult",
    "FetchFailure",
    "OutcomeStats",
    "fetch_html",
    "normalize_markup",
    "parse_article",
    "parse_html",
]
