"""Value types flowing through the normalizer, aggregator and ranker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator

from squadboard.engine.context import StatsContext
from squadboard.engine.metrics import MetricKey

_RAW_FIELDS = (
    "player_id",
    "period",
    "mode",
    "shard",
    "kills",
    "deaths",
    "kd_ratio",
    "win_rate",
    "damage_dealt",
    "survival_time",
    "top1_count",
    "matches_played",
    "computed_at",
)


@dataclass
class RawPlayerStats:
    """Stats for one (player, period, mode, shard) as supplied upstream.

    Numeric fields are typed loosely on purpose: upstream records can be
    partial or garbled and the normalizer is responsible for cleaning them.
    ``kd_ratio`` is authoritative and is never recomputed from kills/deaths.
    """

    player_id: str | None = None
    period: str = ""
    mode: str = ""
    shard: str = ""
    kills: Any = 0.0
    deaths: Any = 0.0
    kd_ratio: Any = 0.0
    win_rate: Any = 0.0
    damage_dealt: Any = 0.0
    survival_time: Any = 0.0
    top1_count: Any = 0
    matches_played: Any = 0
    computed_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawPlayerStats:
        """Build a record from a JSON-like mapping, ignoring unknown keys."""
        kwargs = {key: data[key] for key in _RAW_FIELDS if key in data}
        for tag in ("period", "mode", "shard"):
            if kwargs.get(tag) is None:
                kwargs.pop(tag, None)
        if "player_id" in kwargs and kwargs["player_id"] is not None:
            kwargs["player_id"] = str(kwargs["player_id"])
        kwargs["computed_at"] = _parse_timestamp(data.get("computed_at"))
        return cls(**kwargs)

    @property
    def context(self) -> StatsContext:
        return StatsContext(period=self.period, mode=self.mode, shard=self.shard)


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class CanonicalMetricSet:
    """One player's metrics with every value guaranteed finite.

    ``win_rate`` is a fraction in [0, 1]; converting to a percentage is a
    presentation concern.
    """

    player_id: str
    period: str = ""
    mode: str = ""
    shard: str = ""
    kills: float = 0.0
    deaths: float = 0.0
    kd_ratio: float = 0.0
    win_rate: float = 0.0
    damage_dealt: float = 0.0
    survival_time: float = 0.0
    top1_count: int = 0
    matches_played: int = 0
    computed_at: datetime | None = None

    def value(self, key: MetricKey) -> float:
        """Return the value of *key*."""
        return getattr(self, key.value)

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "player_id": self.player_id,
            "period": self.period,
            "mode": self.mode,
            "shard": self.shard,
        }
        for key in MetricKey:
            result[key.value] = self.value(key)
        result["computed_at"] = (
            self.computed_at.isoformat() if self.computed_at else None
        )
        return result


@dataclass(frozen=True)
class ComparisonEntry:
    """A player's display identity together with their canonical metrics."""

    player_id: str
    display_name: str
    metrics: CanonicalMetricSet

    def as_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.display_name,
            "stats": self.metrics.as_dict(),
        }


@dataclass(frozen=True)
class ComparisonDataset:
    """Entries in selection order plus the context they were computed under."""

    entries: tuple[ComparisonEntry, ...] = ()
    context: StatsContext = field(default_factory=StatsContext)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ComparisonEntry]:
        return iter(self.entries)

    @property
    def player_ids(self) -> list[str]:
        return [entry.player_id for entry in self.entries]

    def as_dict(self) -> dict[str, Any]:
        return {
            "period": self.context.period,
            "mode": self.context.mode,
            "shard": self.context.shard,
            "players": [entry.as_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class RankedEntry:
    """A leaderboard row: a 1-based display position and its entry."""

    rank: int
    entry: ComparisonEntry

    def as_dict(self) -> dict[str, Any]:
        row = {"rank": self.rank}
        row.update(self.entry.as_dict())
        return row
