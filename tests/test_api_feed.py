"""Tests for the /feed API endpoint.

The app runs under the FastAPI TestClient with production settings so the
start-up auto-invocation is skipped.  ``respx`` mocks the upstream site.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from conftest import BASE_URL, SERIES_ID, SERIES_URL
from seriesfeed.api.app import create_app
from seriesfeed.config import Settings
from seriesfeed.pipeline import (
    FAILURE_MESSAGE,
    NO_ENTRIES_MESSAGE,
    FeedRequest,
    FeedResponse,
    SeriesFeedService,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    cfg = Settings(series_id=None, environment="production", base_url=BASE_URL)
    app = create_app(cfg)
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestGetFeed:
    def test_returns_rss(self, client, page_html):
        with respx.mock:
            respx.get(SERIES_URL).mock(
                return_value=httpx.Response(200, text=page_html(2, [1, 2]))
            )
            resp = client.get("/feed", params={"seriesId": SERIES_ID})

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/rss+xml")
        assert "<rss" in resp.text
        assert resp.text.index("Episode 2") < resp.text.index("Episode 1")

    def test_no_entries_returns_404(self, client, page_html):
        with respx.mock:
            respx.get(SERIES_URL).mock(
                return_value=httpx.Response(200, text=page_html(0, []))
            )
            resp = client.get("/feed", params={"seriesId": SERIES_ID})

        assert resp.status_code == 404
        assert resp.text == NO_ENTRIES_MESSAGE
        assert resp.headers["content-type"].startswith("text/plain")

    def test_missing_series_id_returns_500(self, client):
        resp = client.get("/feed")
        assert resp.status_code == 500
        assert resp.text == FAILURE_MESSAGE

    def test_upstream_failure_returns_500(self, client):
        with respx.mock:
            respx.get(SERIES_URL).mock(return_value=httpx.Response(503))
            resp = client.get("/feed", params={"seriesId": SERIES_ID})

        assert resp.status_code == 500
        assert resp.text == FAILURE_MESSAGE

    def test_forwards_traceparent_header(self, client, monkeypatch):
        seen: list[FeedRequest] = []

        def _handle(request: FeedRequest) -> FeedResponse:
            seen.append(request)
            return FeedResponse(status=200, body="ok")

        monkeypatch.setattr(client.app.state.service, "handle", _handle)
        client.get(
            "/feed",
            params={"seriesId": SERIES_ID},
            headers={"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"},
        )

        assert seen == [
            FeedRequest(
                series_id=SERIES_ID,
                traceparent="00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01",
            )
        ]


class TestLifespan:
    def test_service_uses_app_settings(self, client):
        assert client.app.state.service.settings is client.app.state.settings

    def test_development_mode_invokes_once_on_startup(self, monkeypatch):
        calls: list[FeedRequest] = []

        def _record(self, request):
            calls.append(request)

        monkeypatch.setattr(SeriesFeedService, "handle", _record)
        cfg = Settings(series_id=None, environment="development", base_url=BASE_URL)
        with TestClient(create_app(cfg)):
            pass

        assert calls == [FeedRequest()]

    def test_startup_invocation_runs_off_the_event_loop(self, monkeypatch):
        on_loop: list[bool] = []

        def _record(self, request):
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                on_loop.append(False)
            else:
                on_loop.append(True)

        monkeypatch.setattr(SeriesFeedService, "handle", _record)
        cfg = Settings(series_id=None, environment="development", base_url=BASE_URL)
        with TestClient(create_app(cfg)):
            pass

        assert on_loop == [False]

    def test_production_mode_skips_startup_invocation(self, monkeypatch):
        calls: list[FeedRequest] = []
        monkeypatch.setattr(
            SeriesFeedService, "handle", lambda self, request: calls.append(request)
        )
        cfg = Settings(series_id=None, environment="production", base_url=BASE_URL)
        with TestClient(create_app(cfg)):
            pass

        assert calls == []

    def test_healthz(self, client):
        resp = client.get("/healthz")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
