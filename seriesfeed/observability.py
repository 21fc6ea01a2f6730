"""Logging and tracing setup.

Both collaborators are process-wide and configured once at start-up; the
per-request trace context is extracted here and passed down explicitly by the
caller rather than stored on a shared variable.

Production logs go to stdout as one JSON object per line in the shape Cloud
Logging parses natively (``severity`` / ``message`` / labels).  Attach labels
to a record with ``extra={"labels": {...}}``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from seriesfeed.config import Settings

_LABELS_KEY = "logging.googleapis.com/labels"
_propagator = TraceContextTextMapPropagator()


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line structured log entry."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        labels = getattr(record, "labels", None)
        if labels:
            entry[_LABELS_KEY] = {str(k): str(v) for k, v in labels.items()}
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a single stdout handler on the root logger.

    Raises:
        ValueError: If ``settings.log_level`` is not a valid level name.
    """
    numeric_level = getattr(logging, str(settings.log_level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {settings.log_level}")

    if settings.is_development:
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    else:
        formatter = JSONFormatter()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
    root_logger.setLevel(numeric_level)


def get_tracer() -> trace.Tracer:
    """Return the service tracer (a no-op unless an SDK provider is installed)."""
    return trace.get_tracer("seriesfeed")


def extract_context(traceparent: Optional[str]) -> Context:
    """Build a request context from an inbound W3C ``traceparent`` header."""
    carrier = {"traceparent": traceparent} if traceparent else {}
    return _propagator.extract(carrier=carrier)
