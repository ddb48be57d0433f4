"""Tests for the result data classes."""

import pytest

from wepar.parser import ArticleOutcome, ArticleRequest, OutcomeStats


def test_outcome_rejects_empty_fields() -> None:
    """Outcomes cannot be built with an empty title or content."""

    with pytest.raises(ValueError):
        ArticleOutcome(title="", content="<p>x</p>")
    with pytest.raises(ValueError):
        ArticleOutcome(title="t", content="   ")


def test_stats_reject_negative_values() -> None:
    """Counters are never negative."""

    with pytest.raises(ValueError):
        OutcomeStats(image_count=-1)


def test_outcome_to_dict() -> None:
    """The public mapping uses the JSON contract's stat names."""

    outcome = ArticleOutcome(
        title="t",
        content='<img src="a.png">',
        images=["a.png"],
        stats=OutcomeStats(image_count=1, content_length=17),
    )

    assert outcome.to_dict() == {
        "title": "t",
        "content": '<img src="a.png">',
        "images": ["a.png"],
        "stats": {"imageCount": 1, "contentLength": 17},
        "failure": None,
    }
    assert not outcome.is_fallback


@pytest.mark.parametrize(
    ("url", "valid"),
    [
        ("https://mp.weixin.qq.com/s/abc123", True),
        ("https://mp.weixin.qq.com/s?__biz=x", False),
        ("https://example.com/s/abc", False),
        ("not a url", False),
        ("", False),
    ],
)
def test_request_validation(url: str, valid: bool) -> None:
    """Only article links on the publishing host are accepted."""

    assert ArticleRequest(url).is_valid is valid
