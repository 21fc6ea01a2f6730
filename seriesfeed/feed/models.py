"""Data models for the feed side of the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class NormalizedEntry:
    """One feed item.  ``date`` is the upstream ISO-8601 string, unparsed."""

    link: str
    title: str
    image: str
    date: str
    description: str


@dataclass
class Feed:
    title: str
    description: str
    link: str
    entries: List[NormalizedEntry] = field(default_factory=list)
