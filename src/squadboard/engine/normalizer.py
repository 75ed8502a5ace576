"""Stats normalizer: raw upstream record -> canonical metric set."""

from __future__ import annotations

import logging
import math
from typing import Any

from squadboard.engine.errors import InvalidInputError
from squadboard.engine.metrics import METRIC_DEFINITIONS, MetricKey
from squadboard.engine.models import CanonicalMetricSet, RawPlayerStats

logger = logging.getLogger(__name__)


def normalize(raw: RawPlayerStats) -> CanonicalMetricSet:
    """Convert *raw* into a :class:`CanonicalMetricSet`.

    Only the player identifier is validated. Every numeric field that is
    missing, non-numeric, NaN or infinite becomes ``0``; game-domain rules
    (e.g. non-negative deaths) are left to the upstream source. ``kd_ratio``
    and ``win_rate`` are taken as supplied, never recomputed.

    Raises
    ------
    InvalidInputError
        If ``raw.player_id`` is missing or blank.
    """
    player_id = raw.player_id.strip() if isinstance(raw.player_id, str) else ""
    if not player_id:
        raise InvalidInputError()

    values: dict[str, Any] = {}
    defaulted: list[str] = []
    for key in MetricKey:
        cleaned = _finite_or_none(getattr(raw, key.value, None))
        if cleaned is None:
            defaulted.append(key.value)
            cleaned = 0.0
        if METRIC_DEFINITIONS[key].integer:
            values[key.value] = int(cleaned)
        else:
            values[key.value] = cleaned

    if defaulted:
        logger.warning(
            "Defaulted non-finite stats to 0 for player %s: %s",
            player_id,
            ", ".join(defaulted),
        )

    return CanonicalMetricSet(
        player_id=player_id,
        period=raw.period or "",
        mode=raw.mode or "",
        shard=raw.shard or "",
        computed_at=raw.computed_at,
        **values,
    )


def _finite_or_none(value: Any) -> float | None:
    """Return *value* as a finite float, or *None* if that is impossible."""
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
