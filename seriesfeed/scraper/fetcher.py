"""HTTP fetcher for series listing pages."""

from __future__ import annotations

import logging

import httpx

from seriesfeed.config import Settings, settings
from seriesfeed.errors import FetchError
from seriesfeed.scraper.models import SeriesPage

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (compatible; SeriesFeed-Bot/1.0; +https://github.com/series-feed)"
    )
}


def create_client(cfg: Settings = settings) -> httpx.Client:
    """Return the shared client used for every upstream request.

    Create it once per process and pass it to the fetch functions.
    """
    return httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=cfg.request_timeout,
        follow_redirects=True,
    )


def series_url(series_id: str, base_url: str = settings.base_url) -> str:
    """Return the first-page URL for *series_id*."""
    return f"{base_url}/series/{series_id}"


def page_url(canonical_url: str, page_no: int) -> str:
    """Return the URL of page *page_no* relative to the canonical series URL."""
    return f"{canonical_url}?page={page_no}"


def _get(client: httpx.Client, url: str) -> SeriesPage:
    logger.debug("GET %s", url)
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise FetchError(url, str(exc) or type(exc).__name__) from exc

    return SeriesPage(url=url, html=response.text, status_code=response.status_code)


def fetch_series_page(
    client: httpx.Client, series_id: str, base_url: str = settings.base_url
) -> SeriesPage:
    """Fetch the first listing page of *series_id*.

    Raises:
        FetchError: On a transport error or a 4xx/5xx status code.
    """
    return _get(client, series_url(series_id, base_url))


def fetch_page(client: httpx.Client, canonical_url: str, page_no: int) -> SeriesPage:
    """Fetch page *page_no* of the series at *canonical_url*.

    Raises:
        FetchError: On a transport error or a 4xx/5xx status code.
    """
    return _get(client, page_url(canonical_url, page_no))
