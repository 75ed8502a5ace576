"""HTTP stats source for the tracker backend API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from squadboard.config.schema import SourceConfig
from squadboard.engine.errors import NotFoundError, UpstreamUnavailableError
from squadboard.engine.models import RawPlayerStats
from squadboard.sources.base import StatsSource
from squadboard.sources.retry import retry_with_backoff

logger = logging.getLogger(__name__)

# The backend names periods by their window length.
_BACKEND_PERIODS = {"last7d": "7d", "last30d": "30d", "last90d": "90d"}


class HttpStatsSource(StatsSource):
    """Fetches stats from ``GET {api_base}/players/{id}/stats``.

    A 404 (or any other 4xx) becomes :class:`NotFoundError`; connection
    errors, timeouts, 5xx responses and malformed bodies become
    :class:`UpstreamUnavailableError` and are retried with back-off.
    """

    def __init__(
        self,
        config: SourceConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or SourceConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.api_base,
            timeout=httpx.Timeout(self.config.timeout),
        )

    # ------------------------------------------------------------------
    # StatsSource interface
    # ------------------------------------------------------------------

    async def fetch_raw_stats(
        self, player_id: str, period: str, mode: str, shard: str
    ) -> RawPlayerStats:
        data = await retry_with_backoff(
            self._get_json,
            player_id,
            f"/players/{player_id}/stats",
            {
                "period": _BACKEND_PERIODS.get(period, period),
                "mode": mode,
                "shard": shard,
            },
            max_attempts=self.config.max_attempts,
            base_delay=self.config.base_delay,
            max_delay=self.config.max_delay,
        )
        if not data.get("player_id"):
            data["player_id"] = player_id
        # Report the context that was requested, not the backend's alias.
        data["period"] = period
        data.setdefault("mode", mode)
        data.setdefault("shard", shard)
        return RawPlayerStats.from_dict(data)

    async def fetch_display_name(self, player_id: str) -> str:
        data = await retry_with_backoff(
            self._get_json,
            player_id,
            f"/players/{player_id}",
            None,
            max_attempts=self.config.max_attempts,
            base_delay=self.config.base_delay,
            max_delay=self.config.max_delay,
        )
        name = data.get("name")
        return str(name) if name else player_id

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get_json(
        self, player_id: str, path: str, params: dict[str, str] | None
    ) -> dict[str, Any]:
        logger.debug("GET %s params=%s", path, params)
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(player_id, f"timeout: {exc}") from exc
        except httpx.TransportError as exc:
            raise UpstreamUnavailableError(player_id, f"transport error: {exc}") from exc

        if response.status_code >= 500:
            raise UpstreamUnavailableError(
                player_id, f"HTTP {response.status_code} from {path}"
            )
        if response.status_code >= 400:
            raise NotFoundError(player_id, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(player_id, "malformed JSON body") from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(player_id, "unexpected response shape")
        return data
