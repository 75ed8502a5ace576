"""Raw stats sources consumed by the comparison service."""

from squadboard.sources.base import StatsSource
from squadboard.sources.http import HttpStatsSource
from squadboard.sources.retry import retry_with_backoff
from squadboard.sources.snapshot import SnapshotStatsSource

__all__ = [
    "HttpStatsSource",
    "SnapshotStatsSource",
    "StatsSource",
    "retry_with_backoff",
]
