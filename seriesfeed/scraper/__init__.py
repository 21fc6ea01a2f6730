"""Scraper package: series page fetch & embedded data extraction."""

from seriesfeed.scraper.extractor import parse_series_page
from seriesfeed.scraper.fetcher import create_client, fetch_page, fetch_series_page
from seriesfeed.scraper.models import InitialStatePayload, RawItem, SeriesPage

__all__ = [
    "create_client",
    "fetch_series_page",
    "fetch_page",
    "parse_series_page",
    "SeriesPage",
    "RawItem",
    "InitialStatePayload",
]
