"""Recognize anti-automation pages served instead of the article."""

from __future__ import annotations

# Phrases emitted by the verification interstitial.
CHALLENGE_MARKERS = ("环境异常", "完成验证", "verification")


def detect_challenge(html: str) -> bool:
    """Return whether ``html`` is a verification page rather than an article.

    Args:
        html: Raw markup as fetched.

    Returns:
        ``True`` when any known marker phrase occurs in the markup. Pages
        without a marker are assumed to be articles.
    """

    if not html:
        return False
    return any(marker in html for marker in CHALLENGE_MARKERS)
