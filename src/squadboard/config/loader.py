"""Configuration loading and merging."""

from __future__ import annotations

import copy
import logging
from typing import Any

import yaml
from pydantic import ValidationError

from squadboard.config.schema import EngineConfig

logger = logging.getLogger(__name__)


def load_config(path: str | None = None) -> EngineConfig:
    """Load an engine configuration from a YAML file.

    Parameters
    ----------
    path:
        Path to a YAML configuration file.  If *None* or the file does
        not exist, a default :class:`EngineConfig` is returned.

    Returns
    -------
    EngineConfig
        Parsed and validated configuration.
    """
    if path is None:
        logger.debug("No config path provided, using defaults")
        return EngineConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s -- using defaults", path)
        return EngineConfig()
    except yaml.YAMLError as exc:
        logger.error("Failed to parse YAML config %s: %s", path, exc)
        return EngineConfig()

    if not isinstance(data, dict):
        logger.warning("Config file %s did not produce a dict, using defaults", path)
        return EngineConfig()

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as exc:
        logger.error("Config validation failed for %s: %s", path, exc)
        return EngineConfig()


def merge_configs(base: EngineConfig, overrides: dict[str, Any]) -> EngineConfig:
    """Deep-merge an override dict into a base config.

    Invalid overrides are logged and *base* is returned unchanged.
    """
    merged = _deep_merge(base.model_dump(), overrides)

    try:
        return EngineConfig.model_validate(merged)
    except ValidationError as exc:
        logger.error("Merged config validation failed: %s", exc)
        return base


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into a copy of *base*."""
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
