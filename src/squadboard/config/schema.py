"""Pydantic models for all configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NormalizationProfile(BaseModel):
    """Axis floors for the radar comparison.

    Unbounded axes are scaled by ``max(floor, largest observed value)``.
    Win rate is already bounded and is scaled by 100 directly.
    """

    kills_floor: float = Field(default=5.0, gt=0)
    damage_dealt_floor: float = Field(default=500.0, gt=0)
    kd_ratio_floor: float = Field(default=3.0, gt=0)
    survival_time_floor: float = Field(default=1500.0, gt=0)

    def floor_for(self, metric: str) -> float:
        """Return the floor for *metric* (a metric key value)."""
        return getattr(self, f"{metric}_floor")


class SourceConfig(BaseModel):
    """Where raw stats come from."""

    api_base: str = "http://localhost:8080/api"
    timeout: float = 10.0
    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = 0.5
    max_delay: float = 8.0
    snapshot_path: str | None = None


class CacheConfig(BaseModel):
    """In-memory cache of fetched raw stats."""

    enabled: bool = True
    max_entries: int = Field(default=1000, ge=1)
    ttl_seconds: float = Field(default=3600.0, gt=0)


class DefaultsConfig(BaseModel):
    """Defaults used when a request omits period, mode or shard."""

    period: str = "last7d"
    mode: str = "squad"
    shard: str = "steam"


class ExportConfig(BaseModel):
    """Export settings for comparison results."""

    output_dir: str = "./results"
    export_formats: list[str] = Field(default_factory=lambda: ["json"])


class EngineConfig(BaseModel):
    """Top-level configuration."""

    max_players: int = Field(default=10, ge=1)
    normalization: NormalizationProfile = Field(default_factory=NormalizationProfile)
    source: SourceConfig = Field(default_factory=SourceConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
