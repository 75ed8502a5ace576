"""Stats source backed by a pre-fetched YAML/JSON snapshot file.

Expected layout::

    players:
      - player_id: "5f1c..."
        name: "Shroud"
        stats:
          - {period: last7d, mode: squad, shard: steam, kills: 3.2, ...}
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from squadboard.engine.errors import NotFoundError
from squadboard.engine.models import RawPlayerStats
from squadboard.sources.base import StatsSource

logger = logging.getLogger(__name__)


class SnapshotStatsSource(StatsSource):
    """Serves raw stats from an in-memory snapshot mapping."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._names: dict[str, str] = {}
        self._stats: dict[tuple[str, str, str, str], dict[str, Any]] = {}

        for player in data.get("players", []) or []:
            player_id = str(player.get("player_id", "") or "")
            if not player_id:
                logger.warning("Skipping snapshot player without player_id")
                continue
            if player.get("name"):
                self._names[player_id] = str(player["name"])
            for record in player.get("stats", []) or []:
                key = (
                    player_id,
                    str(record.get("period", "")),
                    str(record.get("mode", "")),
                    str(record.get("shard", "")),
                )
                self._stats[key] = dict(record)

        logger.debug(
            "Loaded snapshot with %d player(s), %d stats record(s)",
            len(self._names),
            len(self._stats),
        )

    @classmethod
    def from_file(cls, path: str) -> SnapshotStatsSource:
        """Load a snapshot from a YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Snapshot {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot {path} must contain a mapping")
        logger.info("Loaded stats snapshot from %s", path)
        return cls(data)

    async def fetch_raw_stats(
        self, player_id: str, period: str, mode: str, shard: str
    ) -> RawPlayerStats:
        record = self._stats.get((player_id, period, mode, shard))
        if record is None:
            raise NotFoundError(player_id, f"{period}/{mode}/{shard}")
        data = dict(record)
        if not data.get("player_id"):
            data["player_id"] = player_id
        return RawPlayerStats.from_dict(data)

    async def fetch_display_name(self, player_id: str) -> str:
        return self._names.get(player_id, player_id)
