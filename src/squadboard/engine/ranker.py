"""Leaderboard ranking over a comparison dataset."""

from __future__ import annotations

import logging

from squadboard.engine.metrics import (
    DEFAULT_DIRECTION,
    RANKABLE_METRICS,
    Direction,
    MetricKey,
    coerce_direction,
    coerce_metric,
)
from squadboard.engine.models import ComparisonDataset, RankedEntry

logger = logging.getLogger(__name__)


def rank(
    dataset: ComparisonDataset,
    metric: MetricKey | str,
    direction: Direction | str = DEFAULT_DIRECTION,
) -> list[RankedEntry]:
    """Order *dataset* by *metric* and assign positional ranks.

    Entries with equal values keep their selection order in both
    directions: descending reverses the order of the tie groups, never the
    members inside a group.  Ranks are display positions (1, 2, 3, ...):
    ties never share a rank.

    Raises
    ------
    InvalidMetricError
        If *metric* is not a rankable metric or *direction* is unknown.
    """
    key = coerce_metric(metric, RANKABLE_METRICS)
    order = coerce_direction(direction)

    # sorted() stays stable with reverse=True.
    ordered = sorted(
        dataset.entries,
        key=lambda entry: entry.metrics.value(key),
        reverse=order is Direction.DESCENDING,
    )

    logger.debug(
        "Ranked %d entries by %s (%s)", len(ordered), key.value, order.value
    )
    return [
        RankedEntry(rank=position, entry=entry)
        for position, entry in enumerate(ordered, start=1)
    ]


def toggle_direction(
    current_metric: MetricKey | str,
    current_direction: Direction | str,
    selected_metric: MetricKey | str,
) -> tuple[MetricKey, Direction]:
    """Return the sort state after a leaderboard column is selected.

    Selecting the active column flips the direction; selecting another
    column sorts it descending.
    """
    current = coerce_metric(current_metric, RANKABLE_METRICS)
    selected = coerce_metric(selected_metric, RANKABLE_METRICS)
    if selected is current:
        return selected, coerce_direction(current_direction).flipped()
    return selected, Direction.DESCENDING
