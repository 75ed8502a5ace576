"""Comparison aggregation across multiple players."""

from __future__ import annotations

import logging
from typing import Iterable

from squadboard.config.schema import NormalizationProfile
from squadboard.engine.context import StatsContext
from squadboard.engine.errors import AggregationError, InvalidInputError
from squadboard.engine.metrics import AXIS_METRICS, MetricKey, coerce_metric
from squadboard.engine.models import (
    ComparisonDataset,
    ComparisonEntry,
    RawPlayerStats,
)
from squadboard.engine.normalizer import normalize

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = NormalizationProfile()

# Axis value range for the radar comparison.
AXIS_MAX = 100.0

PlayerInput = tuple[str, str, RawPlayerStats]


def aggregate(
    entries: Iterable[PlayerInput],
    context: StatsContext | None = None,
) -> ComparisonDataset:
    """Normalize every player and merge them into one comparison dataset.

    Parameters
    ----------
    entries:
        ``(player_id, display_name, raw_stats)`` triples in selection order.
    context:
        The period/mode/shard the stats were fetched for.  Taken from the
        first raw record when omitted.

    Returns
    -------
    ComparisonDataset
        Entries in input order.  An empty input yields an empty dataset.

    Raises
    ------
    AggregationError
        If any entry cannot be normalized.  Carries every failing player id.
    """
    built: list[ComparisonEntry] = []
    failed: list[str] = []
    first_raw: RawPlayerStats | None = None

    for player_id, display_name, raw in entries:
        if first_raw is None:
            first_raw = raw
        try:
            metrics = normalize(raw)
        except InvalidInputError as exc:
            logger.debug("Normalization failed for %r: %s", player_id, exc)
            failed.append(player_id)
            continue

        identity = player_id or metrics.player_id
        built.append(
            ComparisonEntry(
                player_id=identity,
                display_name=display_name or identity,
                metrics=metrics,
            )
        )

    if failed:
        raise AggregationError(failed, "stats record has no player identifier")

    if context is None:
        context = first_raw.context if first_raw is not None else StatsContext()

    logger.debug(
        "Aggregated %d player(s) for %s/%s/%s",
        len(built),
        context.period,
        context.mode,
        context.shard,
    )
    return ComparisonDataset(entries=tuple(built), context=context)


def axis_ceilings(
    dataset: ComparisonDataset,
    profile: NormalizationProfile = DEFAULT_PROFILE,
) -> dict[str, float]:
    """Compute the scaling denominator of every radar axis for *dataset*.

    Unbounded axes use ``max(floor, largest observed value)``; win rate is
    fixed at 100 since it is scaled directly.
    """
    ceilings: dict[str, float] = {}
    for key in AXIS_METRICS:
        if key is MetricKey.WIN_RATE:
            ceilings[key.value] = AXIS_MAX
            continue
        observed = [entry.metrics.value(key) for entry in dataset]
        ceilings[key.value] = max([profile.floor_for(key.value), *observed])
    return ceilings


def normalized_axes(
    dataset: ComparisonDataset,
    profile: NormalizationProfile = DEFAULT_PROFILE,
) -> dict[str, dict[str, float]]:
    """Map every player onto the 0-100 radar axes.

    Ceilings depend on the whole dataset, so this is recomputed on every
    call rather than cached per entry.

    Returns
    -------
    dict
        ``{player_id: {axis: value}}`` with every value in [0, 100].
    """
    ceilings = axis_ceilings(dataset, profile)
    result: dict[str, dict[str, float]] = {}

    for entry in dataset:
        axes: dict[str, float] = {}
        for key in AXIS_METRICS:
            raw_value = entry.metrics.value(key)
            if key is MetricKey.WIN_RATE:
                scaled = raw_value * AXIS_MAX
            else:
                scaled = min(raw_value / ceilings[key.value] * AXIS_MAX, AXIS_MAX)
            axes[key.value] = _clamp_axis(scaled)
        result[entry.player_id] = axes

    return result


def _clamp_axis(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > AXIS_MAX:
        return AXIS_MAX
    return value


def metric_series(
    dataset: ComparisonDataset,
    metric: MetricKey | str,
) -> list[tuple[str, float]]:
    """Return ``(display_name, value)`` pairs in selection order.

    Used for single-metric bar comparisons.
    """
    key = coerce_metric(metric)
    return [(entry.display_name, entry.metrics.value(key)) for entry in dataset]

