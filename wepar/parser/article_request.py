"""A single request to parse an article."""

from __future__ import annotations

from urllib.parse import urlparse

from attrs import define

ARTICLE_HOST = "mp.weixin.qq.com"
ARTICLE_PATH = "/s/"


@define(slots=True, frozen=True)
class ArticleRequest:
    """A single request to parse an article.

    Attributes:
        url: Absolute URL of the candidate article page.
    """

    url: str

    @property
    def is_valid(self) -> bool:
        """Whether the URL points at an article on the publishing host."""

        try:
            parsed = urlparse(self.url)
        except ValueError:
            return False
        return ARTICLE_HOST in (parsed.hostname or "") and (
            ARTICLE_PATH in parsed.path
        )
