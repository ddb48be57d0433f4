"""Collect image URLs from cleaned content."""

from __future__ import annotations

from bs4 import BeautifulSoup

from .types import ImageList


def collect_images(content: str) -> ImageList:
    """Return the ``src`` of every image in ``content``.

    Args:
        content: Cleaned HTML fragment.

    Returns:
        Image URLs in document order. Duplicates are kept and images without
        a usable ``src`` are skipped.
    """

    if not content:
        return []

    soup = BeautifulSoup(content, "html.parser")
    images: ImageList = []
    for img in soup.find_all("img"):
        src = str(img.get("src") or "").strip()
        if src:
            images.append(src)
    return images
