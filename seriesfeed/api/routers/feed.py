"""Feed endpoint.

Routes
------
GET /feed?seriesId=<id>    → RSS 2.0 XML (200), "No entries found" (404),
                             or a generic failure message (500)
GET /healthz               → {"status": "ok"}
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, Query, Request, Response

from seriesfeed.pipeline import FeedRequest

router = APIRouter()


@router.get("/feed")
def get_feed(
    request: Request,
    series_id: Optional[str] = Query(None, alias="seriesId"),
    traceparent: Optional[str] = Header(None),
) -> Response:
    """Render the newest items of a series as RSS.

    Falls back to the ``SERIES_ID`` setting when ``seriesId`` is omitted.
    """
    service = request.app.state.service
    result = service.handle(FeedRequest(series_id=series_id, traceparent=traceparent))
    return Response(
        content=result.body,
        status_code=result.status,
        media_type=result.media_type,
    )


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
