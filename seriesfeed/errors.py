"""Exception hierarchy for the feed pipeline."""

from __future__ import annotations


class SeriesFeedError(Exception):
    """Base class for every failure the pipeline raises on purpose."""


class MissingSeriesIdError(SeriesFeedError):
    """No series id in the request and no ``SERIES_ID`` fallback."""

    def __init__(self) -> None:
        super().__init__("No series id specified")


class FetchError(SeriesFeedError):
    """Network failure or non-2xx response from the upstream site."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url


class ParseError(SeriesFeedError):
    """The page markup does not carry the expected embedded data."""
