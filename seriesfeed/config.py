"""Centralised settings for the series feed service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------
    series_id: Optional[str] = field(
        default_factory=lambda: os.environ.get("SERIES_ID") or None
    )

    # ------------------------------------------------------------------
    # Runtime mode
    # ------------------------------------------------------------------
    environment: str = field(
        default_factory=lambda: os.environ.get("SERIES_FEED_ENV", "development")
    )

    @property
    def is_development(self) -> bool:
        """Anything other than ``production`` counts as development."""
        return self.environment != "production"

    # ------------------------------------------------------------------
    # Upstream site
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "SERIES_FEED_BASE_URL", "https://www.nicovideo.jp"
        ).rstrip("/")
    )
    page_size: int = field(
        default_factory=lambda: int(os.environ.get("SERIES_FEED_PAGE_SIZE", "100"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Feed
    # ------------------------------------------------------------------
    max_entries: int = field(
        default_factory=lambda: int(os.environ.get("SERIES_FEED_MAX_ENTRIES", "20"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_name: str = field(
        default_factory=lambda: os.environ.get(
            "SERIES_FEED_LOG_NAME", "niconico-series-feed"
        )
    )


# Module-level singleton, import this everywhere:
#   from seriesfeed.config import settings
settings = Settings()
