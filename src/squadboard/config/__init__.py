"""Configuration loading and validation."""

from squadboard.config.schema import (
    CacheConfig,
    DefaultsConfig,
    EngineConfig,
    ExportConfig,
    NormalizationProfile,
    SourceConfig,
)
from squadboard.config.loader import load_config, merge_configs

__all__ = [
    "CacheConfig",
    "DefaultsConfig",
    "EngineConfig",
    "ExportConfig",
    "NormalizationProfile",
    "SourceConfig",
    "load_config",
    "merge_configs",
]
