"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SeriesPage:
    """The raw HTTP response for one series listing page."""

    url: str
    html: str
    status_code: int
    canonical_url: Optional[str] = None


@dataclass
class RawItem:
    """One video as listed in the page's initial-state payload."""

    id: str
    title: str
    thumbnail_url: str
    short_description: str
    registered_at: str


@dataclass
class InitialStatePayload:
    """The slice of the embedded initial state the feed is built from.

    ``items`` keeps the upstream order, which is oldest-first within a page.
    """

    total_count: int
    title: str
    items: List[RawItem] = field(default_factory=list)
