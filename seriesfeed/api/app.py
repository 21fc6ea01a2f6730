"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging, opens a single ``httpx.Client`` and
builds one :class:`SeriesFeedService` around it (shared across all requests
via ``request.app.state.service``).  In development mode the service is also
invoked once with an empty request so the configured ``SERIES_ID`` feed is
echoed to the console.  On shutdown the client is closed.

Routers
-------
    /feed      - RSS feed for a series
    /healthz   - liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from seriesfeed import __version__
from seriesfeed.config import Settings, settings as default_settings
from seriesfeed.observability import configure_logging
from seriesfeed.pipeline import FeedRequest, SeriesFeedService
from seriesfeed.scraper.fetcher import create_client

from seriesfeed.api.routers import feed as feed_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the upstream client on startup and close it on shutdown."""
    cfg: Settings = app.state.settings
    configure_logging(cfg)
    client = create_client(cfg)
    app.state.service = SeriesFeedService(client, cfg)
    if cfg.is_development:
        await run_in_threadpool(app.state.service.handle, FeedRequest())
    try:
        yield
    finally:
        client.close()


def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Series Feed",
        description="Renders a niconico video series as an RSS 2.0 feed.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = cfg or default_settings

    app.include_router(feed_router.router, tags=["feed"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn seriesfeed.api.app:app
app = create_app()
