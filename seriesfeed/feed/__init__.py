"""Feed package: entry mapping & RSS rendering."""

from seriesfeed.feed.builder import build_feed, render_rss
from seriesfeed.feed.mapper import last_page_number, map_entries, needs_refetch
from seriesfeed.feed.models import Feed, NormalizedEntry

__all__ = [
    "build_feed",
    "render_rss",
    "last_page_number",
    "map_entries",
    "needs_refetch",
    "Feed",
    "NormalizedEntry",
]
