"""Entry selection and mapping from raw upstream items to feed entries."""

from __future__ import annotations

from typing import List, Sequence

from seriesfeed.feed.models import NormalizedEntry
from seriesfeed.scraper.models import InitialStatePayload, RawItem


def needs_refetch(total_count: int, page_size: int) -> bool:
    """Return ``True`` when the series spills past the first page."""
    return total_count > page_size


def last_page_number(total_count: int, page_size: int) -> int:
    """Return the 1-based number of the page holding the newest items."""
    page_no = total_count // page_size
    if total_count % page_size != 0:
        page_no += 1
    return page_no


def select_recent(items: Sequence[RawItem], limit: int) -> List[RawItem]:
    """Return the last *limit* items of an oldest-first page, newest first."""
    return list(reversed(items))[:limit]


def watch_url(base_url: str, video_id: str) -> str:
    return f"{base_url}/watch/{video_id}"


def map_item(item: RawItem, base_url: str) -> NormalizedEntry:
    return NormalizedEntry(
        link=watch_url(base_url, item.id),
        title=item.title,
        image=item.thumbnail_url,
        date=item.registered_at,
        description=item.short_description,
    )


def map_entries(
    payload: InitialStatePayload, base_url: str, limit: int
) -> List[NormalizedEntry]:
    """Return up to *limit* entries from *payload*, newest first."""
    return [map_item(item, base_url) for item in select_recent(payload.items, limit)]
