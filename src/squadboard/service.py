"""Comparison service: fetch raw stats, then aggregate and rank them."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Callable, Sequence

from squadboard.config.schema import CacheConfig, EngineConfig
from squadboard.engine.aggregator import aggregate, normalized_axes
from squadboard.engine.context import StatsContext, parse_context
from squadboard.engine.errors import (
    AggregationError,
    ComparisonRequestError,
    NotFoundError,
    UpstreamUnavailableError,
)
from squadboard.engine.metrics import Direction, MetricKey
from squadboard.engine.models import ComparisonDataset, RankedEntry, RawPlayerStats
from squadboard.engine.ranker import rank
from squadboard.sources.base import StatsSource

logger = logging.getLogger(__name__)

_CacheKey = tuple[str, str, str, str]


class StatsCache:
    """Bounded in-memory cache of raw stats with a time-to-live.

    Least recently used entries are evicted once ``max_entries`` is reached.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or CacheConfig()
        self._clock = clock
        self._entries: OrderedDict[_CacheKey, tuple[float, RawPlayerStats]] = (
            OrderedDict()
        )

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: _CacheKey) -> RawPlayerStats | None:
        item = self._entries.get(key)
        if item is None:
            return None
        stored_at, stats = item
        if self._clock() - stored_at >= self.config.ttl_seconds:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return stats

    def put(self, key: _CacheKey, stats: RawPlayerStats) -> None:
        self._entries[key] = (self._clock(), stats)
        self._entries.move_to_end(key)
        while len(self._entries) > self.config.max_entries:
            self._entries.popitem(last=False)

    def invalidate(self, player_id: str) -> int:
        """Drop every cached context for *player_id*; return how many."""
        stale = [key for key in self._entries if key[0] == player_id]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class ComparisonService:
    """Builds comparison datasets and leaderboards from a stats source.

    The service is the boundary in front of the pure engine: it validates
    the request, fetches every player concurrently and turns any fetch
    failure into a single :class:`AggregationError`.
    """

    def __init__(
        self,
        source: StatsSource,
        config: EngineConfig | None = None,
        cache: StatsCache | None = None,
    ) -> None:
        self.source = source
        self.config = config or EngineConfig()
        if cache is None and self.config.cache.enabled:
            cache = StatsCache(self.config.cache)
        self.cache = cache

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_context(
        self,
        period: str | None = None,
        mode: str | None = None,
        shard: str | None = None,
    ) -> StatsContext:
        """Validate request parameters, filling gaps from config defaults."""
        defaults = self.config.defaults
        return parse_context(
            period if period is not None else defaults.period,
            mode if mode is not None else defaults.mode,
            shard if shard is not None else defaults.shard,
        )

    async def compare(
        self,
        player_ids: Sequence[str],
        context: StatsContext | None = None,
        display_names: dict[str, str] | None = None,
    ) -> ComparisonDataset:
        """Fetch and aggregate stats for *player_ids* in selection order.

        Raises
        ------
        ComparisonRequestError
            If no players or more than ``max_players`` are requested.
        AggregationError
            If any player's stats could not be fetched or normalized.
        """
        ids = self._validate_ids(player_ids)
        context = context or self.resolve_context()
        names = display_names or {}

        logger.info(
            "Comparing %d player(s) for %s/%s/%s",
            len(ids),
            context.period,
            context.mode,
            context.shard,
        )

        results = await asyncio.gather(
            *(self._fetch_one(pid, context, names.get(pid)) for pid in ids),
            return_exceptions=True,
        )

        failed: list[str] = []
        reasons: list[str] = []
        inputs: list[tuple[str, str, RawPlayerStats]] = []
        for pid, result in zip(ids, results):
            if isinstance(result, (NotFoundError, UpstreamUnavailableError)):
                logger.warning("Fetch failed for player %s: %s", pid, result)
                failed.append(pid)
                reasons.append(str(result))
            elif isinstance(result, BaseException):
                raise result
            else:
                inputs.append(result)

        if failed:
            raise AggregationError(failed, "; ".join(reasons))

        return aggregate(inputs, context)

    async def leaderboard(
        self,
        player_ids: Sequence[str],
        context: StatsContext | None = None,
        metric: MetricKey | str = MetricKey.KD_RATIO,
        direction: Direction | str = Direction.DESCENDING,
        display_names: dict[str, str] | None = None,
    ) -> list[RankedEntry]:
        """Fetch, aggregate and rank *player_ids* by *metric*."""
        dataset = await self.compare(player_ids, context, display_names)
        return rank(dataset, metric, direction)

    def axes(self, dataset: ComparisonDataset) -> dict[str, dict[str, float]]:
        """Radar axes for *dataset* using the configured floors."""
        return normalized_axes(dataset, self.config.normalization)

    def invalidate(self, player_id: str) -> None:
        """Forget cached stats for *player_id* (e.g. after a refresh)."""
        if self.cache is not None:
            dropped = self.cache.invalidate(player_id)
            logger.info("Invalidated %d cached stats for player %s", dropped, player_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_ids(self, player_ids: Sequence[str]) -> list[str]:
        ids: list[str] = []
        for raw_id in player_ids:
            pid = str(raw_id).strip()
            if not pid:
                continue
            if pid in ids:
                logger.debug("Ignoring duplicate player id %s", pid)
                continue
            ids.append(pid)

        if not ids:
            raise ComparisonRequestError(
                "No player ids in comparison request",
                "At least one player ID is required.",
            )
        if len(ids) > self.config.max_players:
            raise ComparisonRequestError(
                f"{len(ids)} players requested, limit is {self.config.max_players}",
                f"Maximum {self.config.max_players} players can be compared.",
            )
        return ids

    async def _fetch_one(
        self, player_id: str, context: StatsContext, display_name: str | None
    ) -> tuple[str, str, RawPlayerStats]:
        key = (player_id, *context.cache_key())
        raw = self.cache.get(key) if self.cache is not None else None
        if raw is None:
            raw = await self.source.fetch_raw_stats(player_id, *context.cache_key())
            if self.cache is not None:
                self.cache.put(key, raw)
        else:
            logger.debug("Stats cache hit for %s", key)

        if display_name is None:
            display_name = await self.source.fetch_display_name(player_id)
        return player_id, display_name, raw
