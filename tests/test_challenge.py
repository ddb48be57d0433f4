"""Tests for verification page detection."""

import pytest

from wepar.parser.challenge import CHALLENGE_MARKERS, detect_challenge


@pytest.mark.parametrize("marker", CHALLENGE_MARKERS)
def test_markers_are_detected(marker: str) -> None:
    """Every known marker flags the page."""

    html = f"<html><body><p>当前{marker}，请继续</p></body></html>"

    assert detect_challenge(html)


def test_article_is_not_flagged() -> None:
    """Ordinary article markup passes."""

    html = '<h1 id="activity-name">标题</h1><div id="js_content">正文</div>'

    assert not detect_challenge(html)


def test_empty_markup_is_not_flagged() -> None:
    """Empty responses are left to the extractor."""

    assert not detect_challenge("")
