"""RSS 2.0 serialisation of a :class:`Feed` via ``feedgen``."""

from __future__ import annotations

import logging
import mimetypes
from datetime import datetime, timezone
from typing import Optional

from feedgen.feed import FeedGenerator

from seriesfeed.feed.models import Feed, NormalizedEntry

logger = logging.getLogger(__name__)

_DEFAULT_IMAGE_TYPE = "image/jpeg"


def parse_date(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive timestamps are taken as UTC.  Returns ``None`` when *value* cannot
    be parsed, so a single bad date never aborts the feed.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _image_type(url: str) -> str:
    guessed, _ = mimetypes.guess_type(url.split("?", 1)[0])
    if guessed and guessed.startswith("image/"):
        return guessed
    return _DEFAULT_IMAGE_TYPE


def _add_entry(fg: FeedGenerator, entry: NormalizedEntry) -> Optional[datetime]:
    fe = fg.add_entry(order="append")
    fe.guid(entry.link, permalink=True)
    fe.title(entry.title)
    fe.link(href=entry.link)
    fe.description(entry.description)
    fe.content(entry.link)
    if entry.image:
        fe.enclosure(entry.image, "0", _image_type(entry.image))

    published = parse_date(entry.date)
    if published is None:
        logger.warning("Unparsable date %r for %s", entry.date, entry.link)
    else:
        fe.pubDate(published)
    return published


def build_feed(feed: Feed) -> FeedGenerator:
    """Return a populated :class:`FeedGenerator` for *feed*.

    Entries keep the order given.  ``lastBuildDate`` is pinned to the newest
    entry date so identical input renders identical XML.
    """
    fg = FeedGenerator()
    fg.title(feed.title)
    fg.description(feed.description)
    fg.link(href=feed.link, rel="alternate")

    dates = [d for d in (_add_entry(fg, entry) for entry in feed.entries) if d]
    if dates:
        fg.lastBuildDate(max(dates))
    return fg


def render_rss(feed: Feed) -> str:
    """Serialise *feed* as a pretty-printed RSS 2.0 document."""
    return build_feed(feed).rss_str(pretty=True).decode("utf-8")
