"""Tests for squadboard.config -- schema models and configuration loading."""

from __future__ import annotations

import os
import tempfile

import pytest
import yaml
from pydantic import ValidationError

from squadboard.config.loader import load_config, merge_configs
from squadboard.config.schema import EngineConfig, NormalizationProfile


# ======================================================================
# Defaults
# ======================================================================


class TestEngineConfigDefaults:
    """Test that EngineConfig has the expected default values."""

    def test_max_players(self) -> None:
        assert EngineConfig().max_players == 10

    def test_normalization_floors(self) -> None:
        profile = EngineConfig().normalization
        assert profile.kills_floor == 5.0
        assert profile.damage_dealt_floor == 500.0
        assert profile.kd_ratio_floor == 3.0
        assert profile.survival_time_floor == 1500.0

    def test_cache_defaults(self) -> None:
        cache = EngineConfig().cache
        assert cache.enabled is True
        assert cache.max_entries == 1000
        assert cache.ttl_seconds == 3600.0

    def test_source_defaults(self) -> None:
        source = EngineConfig().source
        assert source.api_base == "http://localhost:8080/api"
        assert source.max_attempts == 3

    def test_request_defaults(self) -> None:
        defaults = EngineConfig().defaults
        assert (defaults.period, defaults.mode, defaults.shard) == (
            "last7d",
            "squad",
            "steam",
        )


class TestNormalizationProfile:
    """Floors are positive and addressable by metric name."""

    def test_floor_for(self) -> None:
        assert NormalizationProfile().floor_for("kd_ratio") == 3.0

    def test_rejects_zero_floor(self) -> None:
        with pytest.raises(ValidationError):
            NormalizationProfile(kills_floor=0)


# ======================================================================
# load_config
# ======================================================================


class TestLoadConfig:
    """Test loading configuration from YAML files."""

    def test_none_path_returns_defaults(self) -> None:
        assert load_config(None) == EngineConfig()

    def test_missing_file_returns_defaults(self) -> None:
        assert load_config("/nonexistent/path/config.yaml") == EngineConfig()

    def test_load_valid_yaml(self) -> None:
        data = {
            "max_players": 4,
            "normalization": {"kills_floor": 8},
            "source": {"api_base": "http://stats.example/api"},
        }
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False, encoding="utf-8"
        ) as f:
            yaml.dump(data, f)
            path = f.name

        try:
            cfg = load_config(path)
            assert cfg.max_players == 4
            assert cfg.normalization.kills_floor == 8.0
            assert cfg.normalization.kd_ratio_floor == 3.0
            assert cfg.source.api_base == "http://stats.example/api"
        finally:
            os.unlink(path)

    def test_invalid_yaml_returns_defaults(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False, encoding="utf-8"
        ) as f:
            f.write("max_players: [unclosed\n")
            path = f.name

        try:
            assert load_config(path) == EngineConfig()
        finally:
            os.unlink(path)

    def test_non_dict_returns_defaults(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False, encoding="utf-8"
        ) as f:
            f.write("- just\n- a list\n")
            path = f.name

        try:
            assert load_config(path) == EngineConfig()
        finally:
            os.unlink(path)

    def test_failed_validation_returns_defaults(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False, encoding="utf-8"
        ) as f:
            yaml.dump({"max_players": 0}, f)
            path = f.name

        try:
            assert load_config(path) == EngineConfig()
        finally:
            os.unlink(path)


# ======================================================================
# merge_configs
# ======================================================================


class TestMergeConfigs:
    """Test deep-merging overrides."""

    def test_nested_override(self) -> None:
        merged = merge_configs(EngineConfig(), {"cache": {"ttl_seconds": 60}})
        assert merged.cache.ttl_seconds == 60.0
        assert merged.cache.max_entries == 1000

    def test_base_untouched(self) -> None:
        base = EngineConfig()
        merge_configs(base, {"max_players": 3})
        assert base.max_players == 10

    def test_invalid_override_returns_base(self) -> None:
        base = EngineConfig()
        assert merge_configs(base, {"max_players": -1}) is base
