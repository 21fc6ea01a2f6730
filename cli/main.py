"""Series Feed CLI: run the feed pipeline from a terminal.

Usage:
    python cli/main.py --help

Commands:
    render    → fetch a series and print (or save) its RSS feed
    inspect   → show what the first listing page of a series reports
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from seriesfeed.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from seriesfeed.config import settings
from seriesfeed.errors import SeriesFeedError
from seriesfeed.feed.mapper import last_page_number
from seriesfeed.observability import configure_logging
from seriesfeed.pipeline import FeedRequest, SeriesFeedService
from seriesfeed.scraper import create_client, fetch_series_page, parse_series_page

app = typer.Typer(
    name="seriesfeed",
    help="niconico series → RSS feed CLI.",
    no_args_is_help=True,
)


@app.command("render")
def render(
    series_id: Optional[str] = typer.Option(
        None, "--series-id", help="Series id (defaults to $SERIES_ID)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the feed to this file instead of stdout."
    ),
) -> None:
    """Build the RSS feed for a series."""
    configure_logging(settings)
    with create_client(settings) as client:
        result = SeriesFeedService(client, settings, echo=False).handle(
            FeedRequest(series_id=series_id)
        )

    if result.status != 200:
        typer.echo(f"[render] HTTP {result.status}: {result.body}", err=True)
        raise typer.Exit(1)

    if output is None:
        typer.echo(result.body)
    else:
        output.write_text(result.body, encoding="utf-8")
        typer.echo(f"[render] Feed written to {output}")


@app.command("inspect")
def inspect(
    series_id: str = typer.Argument(..., help="Series id to inspect."),
) -> None:
    """Fetch the first listing page and print its embedded metadata."""
    configure_logging(settings)
    try:
        with create_client(settings) as client:
            page, payload = parse_series_page(
                fetch_series_page(client, series_id, settings.base_url)
            )
    except SeriesFeedError as exc:
        typer.echo(f"[inspect] {exc}", err=True)
        raise typer.Exit(1)

    pages = last_page_number(payload.total_count, settings.page_size)
    typer.echo(f"[inspect] Title     : {payload.title}")
    typer.echo(f"[inspect] Total     : {payload.total_count}")
    typer.echo(f"[inspect] Pages     : {pages}")
    typer.echo(f"[inspect] On page 1 : {len(payload.items)}")
    typer.echo(f"[inspect] Canonical : {page.canonical_url or '(none)'}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
