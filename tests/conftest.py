"""Shared fixtures: synthetic niconico series pages.

The real page embeds its initial state as HTML-escaped JSON on
``#js-initial-userpage-data``; :func:`series_html` reproduces that shape.
"""

from __future__ import annotations

import html
import json
from typing import Any, Callable, Optional

import pytest

BASE_URL = "https://www.nicovideo.jp"
SERIES_ID = "12345"
SERIES_URL = f"{BASE_URL}/series/{SERIES_ID}"
CANONICAL_URL = f"{BASE_URL}/user/999/series/{SERIES_ID}"


def make_video(n: int) -> dict[str, Any]:
    return {
        "meta": {"status": 200},
        "video": {
            "id": f"sm{n}",
            "title": f"Episode {n}",
            "registeredAt": f"2023-01-{(n % 28) + 1:02d}T12:00:00+09:00",
            "shortDescription": f"Description {n}",
            "thumbnail": {"url": f"https://nicovideo.cdn.nimg.jp/thumbnails/{n}/{n}.jpg"},
        },
    }


def make_initial_data(
    total_count: int, videos: list[dict[str, Any]], title: str = "My Series"
) -> dict[str, Any]:
    return {
        "state": {},
        "nvapi": [
            {
                "method": "GET",
                "path": f"/v2/series/{SERIES_ID}",
                "query": {"page": 1, "pageSize": 100},
                "body": {
                    "meta": {"status": 200},
                    "data": {
                        "detail": {"id": int(SERIES_ID), "title": title},
                        "totalCount": total_count,
                        "items": videos,
                    },
                },
            }
        ],
    }


def series_html(
    initial_data: Optional[dict[str, Any]],
    canonical_url: Optional[str] = CANONICAL_URL,
) -> str:
    head = f'<link rel="canonical" href="{canonical_url}">' if canonical_url else ""
    body = ""
    if initial_data is not None:
        attr = html.escape(json.dumps(initial_data, ensure_ascii=False), quote=True)
        body = f'<div id="js-initial-userpage-data" data-initial-data="{attr}"></div>'
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


@pytest.fixture()
def page_html() -> Callable[..., str]:
    """Return a factory: ``page_html(total_count, [1, 2, 3], title=...)``."""

    def _factory(
        total_count: int,
        numbers: list[int],
        title: str = "My Series",
        canonical_url: Optional[str] = CANONICAL_URL,
    ) -> str:
        videos = [make_video(n) for n in numbers]
        return series_html(make_initial_data(total_count, videos, title), canonical_url)

    return _factory
