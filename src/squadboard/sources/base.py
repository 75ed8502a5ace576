"""Abstract base class for raw stats sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from squadboard.engine.models import RawPlayerStats


class StatsSource(ABC):
    """Supplies raw stats for a (player, period, mode, shard) tuple.

    Implementations raise :class:`~squadboard.engine.errors.NotFoundError`
    when no stats exist and
    :class:`~squadboard.engine.errors.UpstreamUnavailableError` on
    transport failure.  Fetches have no side effects, so callers may retry.
    """

    @abstractmethod
    async def fetch_raw_stats(
        self, player_id: str, period: str, mode: str, shard: str
    ) -> RawPlayerStats:
        """Return the raw stats for one player in one context."""
        ...

    async def fetch_display_name(self, player_id: str) -> str:
        """Return the player's display name, defaulting to the id."""
        return player_id

    async def aclose(self) -> None:
        """Release any resources held by the source."""

    async def __aenter__(self) -> StatsSource:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
