"""Metric key vocabulary and the shared metric definition table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from squadboard.engine.errors import InvalidMetricError


class MetricKey(Enum):
    """Every metric carried by a canonical metric set."""

    KILLS = "kills"
    DEATHS = "deaths"
    KD_RATIO = "kd_ratio"
    WIN_RATE = "win_rate"
    DAMAGE_DEALT = "damage_dealt"
    SURVIVAL_TIME = "survival_time"
    TOP1_COUNT = "top1_count"
    MATCHES_PLAYED = "matches_played"


class Direction(Enum):
    """Leaderboard sort direction."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> Direction:
        if self is Direction.ASCENDING:
            return Direction.DESCENDING
        return Direction.ASCENDING


@dataclass(frozen=True)
class MetricDefinition:
    """Display metadata for one metric."""

    key: MetricKey
    label: str
    decimals: int
    integer: bool = False


METRIC_DEFINITIONS: dict[MetricKey, MetricDefinition] = {
    MetricKey.KILLS: MetricDefinition(MetricKey.KILLS, "Average Kills", 2),
    MetricKey.DEATHS: MetricDefinition(MetricKey.DEATHS, "Deaths", 2),
    MetricKey.KD_RATIO: MetricDefinition(MetricKey.KD_RATIO, "K/D Ratio", 2),
    MetricKey.WIN_RATE: MetricDefinition(MetricKey.WIN_RATE, "Win Rate (%)", 1),
    MetricKey.DAMAGE_DEALT: MetricDefinition(
        MetricKey.DAMAGE_DEALT, "Average Damage", 0
    ),
    MetricKey.SURVIVAL_TIME: MetricDefinition(
        MetricKey.SURVIVAL_TIME, "Survival Time (s)", 0
    ),
    MetricKey.TOP1_COUNT: MetricDefinition(
        MetricKey.TOP1_COUNT, "Wins", 0, integer=True
    ),
    MetricKey.MATCHES_PLAYED: MetricDefinition(
        MetricKey.MATCHES_PLAYED, "Matches", 0, integer=True
    ),
}

# Columns the leaderboard can be sorted by.
RANKABLE_METRICS: tuple[MetricKey, ...] = (
    MetricKey.KILLS,
    MetricKey.DAMAGE_DEALT,
    MetricKey.KD_RATIO,
    MetricKey.WIN_RATE,
    MetricKey.MATCHES_PLAYED,
)

# Radar chart axes, in display order.
AXIS_METRICS: tuple[MetricKey, ...] = (
    MetricKey.KILLS,
    MetricKey.KD_RATIO,
    MetricKey.WIN_RATE,
    MetricKey.DAMAGE_DEALT,
    MetricKey.SURVIVAL_TIME,
)

DEFAULT_SORT_KEY = MetricKey.KD_RATIO
DEFAULT_DIRECTION = Direction.DESCENDING


def format_metric(key: MetricKey, value: float) -> str:
    """Render *value* with the display precision of *key*.

    Win rate is stored as a fraction and shown as a percentage.
    """
    definition = METRIC_DEFINITIONS[key]
    if key is MetricKey.WIN_RATE:
        return f"{value * 100:.{definition.decimals}f}%"
    if definition.integer:
        return str(int(value))
    return f"{value:.{definition.decimals}f}"


def coerce_metric(
    key: MetricKey | str, allowed: tuple[MetricKey, ...] = tuple(MetricKey)
) -> MetricKey:
    """Resolve *key* to a :class:`MetricKey` from *allowed*.

    Raises
    ------
    InvalidMetricError
        If *key* does not name one of the allowed metrics.
    """
    if isinstance(key, MetricKey):
        metric = key
    else:
        try:
            metric = MetricKey(key)
        except ValueError:
            raise InvalidMetricError(key, [m.value for m in allowed]) from None
    if metric not in allowed:
        raise InvalidMetricError(metric.value, [m.value for m in allowed])
    return metric


def coerce_direction(direction: Direction | str) -> Direction:
    """Resolve *direction*, accepting the short forms ``asc`` and ``desc``."""
    if isinstance(direction, Direction):
        return direction
    value = str(direction).strip().lower()
    aliases = {"asc": Direction.ASCENDING, "desc": Direction.DESCENDING}
    if value in aliases:
        return aliases[value]
    try:
        return Direction(value)
    except ValueError:
        raise InvalidMetricError(
            direction, [d.value for d in Direction]
        ) from None
