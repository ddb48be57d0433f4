"""The article-shaped result handed back to callers."""

from __future__ import annotations

from attrs import define, field, validators

from .types import ImageList, OutcomeDict


def _non_empty(instance: object, attribute: object, value: str) -> None:
    """Reject empty or whitespace-only strings."""

    if not value or not value.strip():
        name = getattr(attribute, "name", "value")
        raise ValueError(f"{name} must not be empty")


@define(slots=True)
class OutcomeStats:
    """Counters describing the returned content.

    Attributes:
        image_count: Number of images found in the content.
        content_length: Length of the content fragment in characters.
    """

    image_count: int = field(default=0, validator=validators.ge(0))
    content_length: int = field(default=0, validator=validators.ge(0))


@define(slots=True)
class ArticleOutcome:
    """The article-shaped result handed back to callers.

    Attributes:
        title: Article title, never empty.
        content: HTML fragment for the article body, never empty.
        images: Image URLs in document order.
        stats: Image count and content length.
        failure: ``None`` for extracted content, otherwise the kind of
            failure that produced fallback content (``challenge``,
            ``fetch``, ``empty`` or ``unexpected``).
    """

    title: str = field(validator=_non_empty)
    content: str = field(validator=_non_empty)
    images: ImageList = field(factory=list, repr=False)
    stats: OutcomeStats = field(factory=OutcomeStats)
    failure: str | None = None

    @property
    def is_fallback(self) -> bool:
        """Whether the content was synthesized instead of extracted."""

        return self.failure is not None

    def to_dict(self) -> OutcomeDict:
        """Return the public mapping used by the CLI and web layer."""

        return {
            "title": self.title,
            "content": self.content,
            "images": list(self.images),
            "stats": {
                "imageCount": self.stats.image_count,
                "contentLength": self.stats.content_length,
            },
            "failure": self.failure,
        }
