"""squadboard -- player stats aggregation, comparison and leaderboards."""

from squadboard.engine import (
    ComparisonDataset,
    ComparisonEntry,
    Direction,
    MetricKey,
    RankedEntry,
    RawPlayerStats,
    StatsContext,
    aggregate,
    normalize,
    normalized_axes,
    parse_context,
    rank,
)

__version__ = "0.1.0"

__all__ = [
    "ComparisonDataset",
    "ComparisonEntry",
    "Direction",
    "MetricKey",
    "RankedEntry",
    "RawPlayerStats",
    "StatsContext",
    "aggregate",
    "normalize",
    "normalized_axes",
    "parse_context",
    "rank",
]
