"""Pure stats engine: normalize, aggregate, compare and rank."""

from squadboard.engine.aggregator import (
    aggregate,
    axis_ceilings,
    metric_series,
    normalized_axes,
)
from squadboard.engine.context import (
    GameMode,
    Period,
    Shard,
    StatsContext,
    parse_context,
)
from squadboard.engine.errors import (
    AggregationError,
    ComparisonRequestError,
    InvalidContextError,
    InvalidInputError,
    InvalidMetricError,
    NotFoundError,
    StatsEngineError,
    UpstreamUnavailableError,
)
from squadboard.engine.metrics import (
    AXIS_METRICS,
    METRIC_DEFINITIONS,
    RANKABLE_METRICS,
    Direction,
    MetricKey,
    format_metric,
)
from squadboard.engine.models import (
    CanonicalMetricSet,
    ComparisonDataset,
    ComparisonEntry,
    RankedEntry,
    RawPlayerStats,
)
from squadboard.engine.normalizer import normalize
from squadboard.engine.ranker import rank, toggle_direction

__all__ = [
    "AXIS_METRICS",
    "AggregationError",
    "CanonicalMetricSet",
    "ComparisonDataset",
    "ComparisonEntry",
    "ComparisonRequestError",
    "Direction",
    "GameMode",
    "InvalidContextError",
    "InvalidInputError",
    "InvalidMetricError",
    "METRIC_DEFINITIONS",
    "MetricKey",
    "NotFoundError",
    "Period",
    "RANKABLE_METRICS",
    "RankedEntry",
    "RawPlayerStats",
    "Shard",
    "StatsContext",
    "StatsEngineError",
    "UpstreamUnavailableError",
    "aggregate",
    "axis_ceilings",
    "format_metric",
    "metric_series",
    "normalize",
    "normalized_axes",
    "parse_context",
    "rank",
    "toggle_direction",
]
