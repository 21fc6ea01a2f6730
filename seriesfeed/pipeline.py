"""Request pipeline: fetch → parse → (refetch → reparse) → map → build.

:class:`SeriesFeedService` is the trigger boundary.  It is constructed once per
process with its collaborators (HTTP client, settings, tracer) and then handles
any number of independent requests; nothing is stored on it per request.  The
trace context for a request is extracted in :meth:`SeriesFeedService.handle`
and passed to every stage as an argument.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import httpx
from opentelemetry import trace
from opentelemetry.context import Context

from seriesfeed.config import Settings, settings as default_settings
from seriesfeed.errors import MissingSeriesIdError, ParseError
from seriesfeed.feed.builder import render_rss
from seriesfeed.feed.mapper import last_page_number, map_entries, needs_refetch
from seriesfeed.feed.models import Feed
from seriesfeed.observability import extract_context, get_tracer
from seriesfeed.scraper.extractor import parse_series_page
from seriesfeed.scraper.fetcher import fetch_page, fetch_series_page, series_url
from seriesfeed.scraper.models import InitialStatePayload, SeriesPage

NO_ENTRIES_MESSAGE = "No entries found"
FAILURE_MESSAGE = "something went wrong. please check logs"
RSS_MEDIA_TYPE = "application/rss+xml; charset=utf-8"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class FeedRequest:
    series_id: Optional[str] = None
    traceparent: Optional[str] = None


@dataclass(frozen=True)
class FeedResponse:
    status: int
    body: str
    media_type: str = TEXT_MEDIA_TYPE


class SeriesFeedService:
    """Turns a series id into an RSS document."""

    def __init__(
        self,
        client: httpx.Client,
        settings: Settings = default_settings,
        tracer: Optional[trace.Tracer] = None,
        echo: Optional[bool] = None,
    ) -> None:
        self.client = client
        self.settings = settings
        self.tracer = tracer or get_tracer()
        # development mode logs each request and its rendered response
        self.echo = settings.is_development if echo is None else echo
        self.log = logging.getLogger(settings.log_name)

    # ------------------------------------------------------------------
    # Trigger boundary
    # ------------------------------------------------------------------

    def handle(self, request: FeedRequest) -> FeedResponse:
        """Run one request to a terminal response.  Never raises."""
        ctx = extract_context(request.traceparent)
        if self.echo:
            self.log.info("Request: %r", request)

        try:
            response = self.generate(request.series_id, ctx)
        except Exception as exc:
            self.log.error("Feed generation failed: %r", exc, exc_info=exc)
            return FeedResponse(status=500, body=FAILURE_MESSAGE)

        if self.echo:
            self.log.info("Response %d:\n%s", response.status, response.body)
        return response

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def generate(self, series_id: Optional[str], ctx: Context) -> FeedResponse:
        """Run the pipeline for *series_id* under the trace context *ctx*.

        Raises:
            MissingSeriesIdError: No id in the request or in settings.
            FetchError: Upstream request failed.
            ParseError: Page lacks the expected embedded data.
        """
        series_id = series_id or self.settings.series_id
        if not series_id:
            raise MissingSeriesIdError()

        page, payload = self._load(series_id, ctx)
        self.log.info(
            "Count %d for %s",
            payload.total_count,
            payload.title,
            extra={"labels": {"logType": "feedCount"}},
        )

        entries = map_entries(payload, self.settings.base_url, self.settings.max_entries)
        if not entries:
            self.log.critical(
                "%s: %s 「%s」", NO_ENTRIES_MESSAGE, page.canonical_url, payload.title
            )
            return FeedResponse(status=404, body=NO_ENTRIES_MESSAGE)

        with self._span("createFeed", ctx):
            feed = Feed(
                title=payload.title,
                description=payload.title,
                link=series_url(series_id, self.settings.base_url),
                entries=entries,
            )
            body = render_rss(feed)

        self.log.info("Create feed successfully: %s", page.canonical_url)
        return FeedResponse(status=200, body=body, media_type=RSS_MEDIA_TYPE)

    def _load(
        self, series_id: str, ctx: Context
    ) -> Tuple[SeriesPage, InitialStatePayload]:
        """Return the page whose items feed the output, with its payload.

        When the series spans several pages the first page is discarded and
        the last one is returned instead.
        """
        with self._span("fetch", ctx):
            page = fetch_series_page(self.client, series_id, self.settings.base_url)
        with self._span("parse", ctx):
            page, payload = parse_series_page(page)

        if not needs_refetch(payload.total_count, self.settings.page_size):
            return page, payload

        if not page.canonical_url:
            raise ParseError(f"No canonical URL on {page.url}; cannot fetch last page")
        page_no = last_page_number(payload.total_count, self.settings.page_size)

        with self._span("reFetch", ctx):
            last = fetch_page(self.client, page.canonical_url, page_no)
        with self._span("reParse", ctx):
            return parse_series_page(last)

    @contextmanager
    def _span(self, name: str, ctx: Context) -> Iterator[None]:
        with self.tracer.start_as_current_span(name, context=ctx):
            yield
