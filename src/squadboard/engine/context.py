"""Query context (period, mode, shard) and its boundary validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from squadboard.engine.errors import InvalidContextError


class Period(Enum):
    LAST_7D = "last7d"
    LAST_30D = "last30d"
    LAST_90D = "last90d"


class GameMode(Enum):
    SOLO = "solo"
    DUO = "duo"
    SQUAD = "squad"


class Shard(Enum):
    STEAM = "steam"
    XBOX = "xbox"
    PSN = "psn"
    KAKAO = "kakao"
    STADIA = "stadia"


@dataclass(frozen=True)
class StatsContext:
    """The grouping tags a comparison is computed under.

    Inside the core these are opaque strings; only :func:`parse_context`
    checks them against the supported values.
    """

    period: str = Period.LAST_7D.value
    mode: str = GameMode.SQUAD.value
    shard: str = Shard.STEAM.value

    def cache_key(self) -> tuple[str, str, str]:
        return (self.period, self.mode, self.shard)


_E = TypeVar("_E", bound=Enum)


def _parse(enum_cls: type[_E], parameter: str, value: str | None) -> _E:
    raw = (value or "").strip().lower()
    for member in enum_cls:
        if member.value == raw:
            return member
    raise InvalidContextError(parameter, value, [m.value for m in enum_cls])


def parse_context(
    period: str | None = None,
    mode: str | None = None,
    shard: str | None = None,
) -> StatsContext:
    """Validate externally supplied period/mode/shard strings.

    *None* selects the default for that parameter. Matching is
    case-insensitive.

    Raises
    ------
    InvalidContextError
        If any value is not a supported tag.
    """
    defaults = StatsContext()
    return StatsContext(
        period=_parse(Period, "period", period).value if period is not None else defaults.period,
        mode=_parse(GameMode, "mode", mode).value if mode is not None else defaults.mode,
        shard=_parse(Shard, "shard", shard).value if shard is not None else defaults.shard,
    )
