"""Raw page returned by the fetcher."""

from __future__ import annotations

from attrs import define


@define(slots=True, frozen=True)
class FetchResponse:
    """Raw page returned by the fetcher.

    Attributes:
        status: HTTP status code of the final response.
        text: Decoded response body.
    """

    status: int
    text: str
