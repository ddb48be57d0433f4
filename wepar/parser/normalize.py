"""Clean article fragments while keeping images displayable."""

from __future__ import annotations

import logging
import re
from typing import Callable

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Lazy-load attributes tried in order before the generic ``data-*src*`` scan.
LAZY_SOURCE_ATTRS = ("data-src", "data-original-src", "data-croporisrc")
LAZY_SOURCE_PATTERN = re.compile(r"^data-.*src", re.IGNORECASE)

DEFAULT_ALT = "文章图片"
RESPONSIVE_STYLE = "max-width: 100%; height: auto; display: block;"

# ``data-*`` attributes surviving the pruning pass, matched by prefix.
KEPT_DATA_PREFIXES = ("data-src", "data-original-src", "data-alt")
IMAGE_HINT = re.compile(r"img|image|photo|picture", re.IGNORECASE)

Transform = Callable[[BeautifulSoup], None]


def _resolve_lazy_sources(soup: BeautifulSoup) -> None:
    """Copy lazy-load attribute values into ``src`` when it is missing."""

    for img in soup.find_all("img"):
        if img.get("src"):
            continue

        # Prefer the well-known names, then any ``data-*src*`` attribute.
        source = next(
            (img[name] for name in LAZY_SOURCE_ATTRS if img.get(name)), None
        )
        if source is None:
            source = next(
                (
                    value
                    for name, value in img.attrs.items()
                    if LAZY_SOURCE_PATTERN.match(name)
                    and isinstance(value, str)
                    and value
                ),
                None,
            )
        if source is not None:
            img["src"] = source


def _default_alt(soup: BeautifulSoup) -> None:
    """Give every image an ``alt`` text."""

    for img in soup.find_all("img"):
        if not img.has_attr("alt"):
            img["alt"] = DEFAULT_ALT


def _responsive_style(soup: BeautifulSoup) -> None:
    """Append the responsive style to every image."""

    for img in soup.find_all("img"):
        style = str(img.get("style", "")).strip()
        if RESPONSIVE_STYLE in style:
            continue
        style = style.rstrip(";").strip()
        img["style"] = (
            f"{style}; {RESPONSIVE_STYLE}" if style else RESPONSIVE_STYLE
        )


def _remove_noise(soup: BeautifulSoup) -> None:
    """Drop scripts and styles together with their contents."""

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()


def _keep_attribute(
    tag_name: str, name: str, value: object, has_src: bool
) -> bool:
    """Decide whether an attribute survives pruning."""

    if name.startswith("data-"):
        # Images already expose the lazy source through ``src``.
        if tag_name == "img" and name == "data-src" and has_src:
            return False
        return name.startswith(KEPT_DATA_PREFIXES)

    if name in ("class", "id"):
        text = " ".join(value) if isinstance(value, list) else str(value)
        return bool(IMAGE_HINT.search(text))

    return True


def _prune_attributes(soup: BeautifulSoup) -> None:
    """Remove tracking ``data-*`` attributes and layout classes and ids."""

    for tag in soup.find_all(True):
        has_src = bool(tag.get("src"))
        for name in list(tag.attrs):
            if not _keep_attribute(tag.name, name, tag.attrs[name], has_src):
                del tag.attrs[name]


# Order matters: later passes rely on images already carrying ``src``.
TRANSFORMS: list[Transform] = [
    _resolve_lazy_sources,
    _default_alt,
    _responsive_style,
    _remove_noise,
    _prune_attributes,
]


def collapse_whitespace(markup: str) -> str:
    """Collapse whitespace runs and drop whitespace between tags."""

    text = re.sub(r"\s+", " ", markup).strip()
    return re.sub(r">\s+<", "><", text)


def normalize_markup(fragment: str) -> str:
    """Return a cleaned copy of an article HTML fragment.

    Lazy-loaded images receive a real ``src``, a default ``alt`` and a
    responsive style; scripts, styles and noise attributes are removed and
    whitespace is collapsed. Running the function on its own output changes
    nothing.

    Args:
        fragment: Raw HTML fragment taken from the article container.

    Returns:
        The cleaned fragment. When the markup cannot be processed the input
        is returned unchanged.
    """

    if not fragment or not fragment.strip():
        return ""

    try:
        soup = BeautifulSoup(fragment, "html.parser")
        for transform in TRANSFORMS:
            transform(soup)
        return collapse_whitespace(str(soup))
    except Exception:  # noqa: BLE001
        logger.exception("Could not normalize fragment; keeping it as is")
        return fragment
