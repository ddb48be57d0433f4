"""Raw title and body located in a parsed page."""

from __future__ import annotations

from attrs import define


@define(slots=True)
class ExtractionResult:
    """Raw title and body located in a parsed page.

    Attributes:
        title: Trimmed title text, empty when no selector matched.
        content: Normalized HTML fragment, empty when nothing qualified.
    """

    title: str = ""
    content: str = ""

    @property
    def is_empty(self) -> bool:
        """Whether neither a title nor a body was found."""

        return not self.title and not self.content
