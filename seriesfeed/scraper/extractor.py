"""Page parsing: turns a :class:`SeriesPage` into an :class:`InitialStatePayload`.

This module is the only place that knows the upstream page-data contract: the
canonical ``<link>`` tag, the ``#js-initial-userpage-data`` element, and the
``nvapi[0].body.data`` shape of its JSON.  Upstream markup changes should only
ever require edits here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Optional, Tuple

from bs4 import BeautifulSoup

from seriesfeed.errors import ParseError
from seriesfeed.scraper.models import InitialStatePayload, RawItem, SeriesPage

logger = logging.getLogger(__name__)

_INITIAL_DATA_ID = "js-initial-userpage-data"
_INITIAL_DATA_ATTR = "data-initial-data"
_THUMBNAIL_KEYS = ("url", "middleUrl", "listingUrl")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _as_dict(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"Expected an object at {where}")
    return value


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _thumbnail_url(video: dict[str, Any]) -> str:
    thumbnail = video.get("thumbnail")
    if not isinstance(thumbnail, dict):
        return ""
    for key in _THUMBNAIL_KEYS:
        if thumbnail.get(key):
            return str(thumbnail[key])
    return ""


def _raw_item(item: Any, index: int) -> Optional[RawItem]:
    """Return the item at *index*, or ``None`` (with a warning) if it is unusable."""
    video = item.get("video") if isinstance(item, dict) else None
    if not isinstance(video, dict) or not video.get("id"):
        logger.warning("Skipping items[%d]: no video id", index)
        return None
    video_id = video["id"]
    return RawItem(
        id=str(video_id),
        title=_str(video.get("title")),
        thumbnail_url=_thumbnail_url(video),
        short_description=_str(video.get("shortDescription")),
        registered_at=_str(video.get("registeredAt")),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_canonical_url(soup: BeautifulSoup) -> Optional[str]:
    """Return the ``href`` of ``<link rel="canonical">``, or ``None``."""
    link = soup.find("link", rel="canonical")
    if link is None:
        return None
    href = link.get("href")
    return href.strip() if isinstance(href, str) and href.strip() else None


def extract_initial_data(soup: BeautifulSoup) -> dict[str, Any]:
    """Return the JSON stored on the initial-data element.

    Raises:
        ParseError: If the element or its attribute is missing, or the
            attribute is not a JSON object.
    """
    element = soup.find(id=_INITIAL_DATA_ID)
    if element is None:
        raise ParseError(f"#{_INITIAL_DATA_ID} not found in page")
    raw = element.get(_INITIAL_DATA_ATTR)
    if not isinstance(raw, str) or not raw:
        raise ParseError(f"#{_INITIAL_DATA_ID} has no {_INITIAL_DATA_ATTR} attribute")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Malformed initial data JSON: {exc}") from exc
    return _as_dict(data, "initial data")


def extract_payload(initial_data: dict[str, Any]) -> InitialStatePayload:
    """Map ``nvapi[0].body.data`` onto an :class:`InitialStatePayload`.

    Only the first ``nvapi`` entry is consulted.

    Raises:
        ParseError: If the nested structure, ``totalCount`` or
            ``detail.title`` is missing or of the wrong type.
    """
    nvapi = initial_data.get("nvapi")
    if not isinstance(nvapi, list) or not nvapi:
        raise ParseError("initial data has no nvapi entries")
    body = _as_dict(_as_dict(nvapi[0], "nvapi[0]").get("body"), "nvapi[0].body")
    data = _as_dict(body.get("data"), "nvapi[0].body.data")

    total_count = data.get("totalCount")
    if isinstance(total_count, bool) or not isinstance(total_count, int):
        raise ParseError("totalCount is missing or not an integer")

    title = _as_dict(data.get("detail"), "detail").get("title")
    if not isinstance(title, str):
        raise ParseError("detail.title is missing")

    items = data.get("items") or []
    if not isinstance(items, list):
        raise ParseError("items is not a list")

    return InitialStatePayload(
        total_count=total_count,
        title=title,
        items=[raw for raw in (_raw_item(item, i) for i, item in enumerate(items)) if raw],
    )


def parse_series_page(page: SeriesPage) -> Tuple[SeriesPage, InitialStatePayload]:
    """Parse *page* and return it with ``canonical_url`` set, plus its payload.

    Raises:
        ParseError: See :func:`extract_initial_data` and :func:`extract_payload`.
    """
    soup = BeautifulSoup(page.html, "html.parser")
    payload = extract_payload(extract_initial_data(soup))
    return replace(page, canonical_url=extract_canonical_url(soup)), payload
