"""Tests for squadboard.engine.metrics and squadboard.engine.context."""

from __future__ import annotations

import pytest

from squadboard.engine.context import StatsContext, parse_context
from squadboard.engine.errors import InvalidContextError, InvalidMetricError
from squadboard.engine.metrics import (
    AXIS_METRICS,
    METRIC_DEFINITIONS,
    RANKABLE_METRICS,
    Direction,
    MetricKey,
    coerce_direction,
    coerce_metric,
    format_metric,
)


# ======================================================================
# Metric table
# ======================================================================


class TestMetricTable:
    """The definition table covers the whole vocabulary."""

    def test_every_key_defined(self) -> None:
        assert set(METRIC_DEFINITIONS) == set(MetricKey)

    def test_rankable_set(self) -> None:
        assert {m.value for m in RANKABLE_METRICS} == {
            "kills",
            "damage_dealt",
            "kd_ratio",
            "win_rate",
            "matches_played",
        }

    def test_axis_order(self) -> None:
        assert [m.value for m in AXIS_METRICS] == [
            "kills",
            "kd_ratio",
            "win_rate",
            "damage_dealt",
            "survival_time",
        ]


class TestFormatMetric:
    """Display precision per metric."""

    def test_kills_two_decimals(self) -> None:
        assert format_metric(MetricKey.KILLS, 2.456) == "2.46"

    def test_damage_no_decimals(self) -> None:
        assert format_metric(MetricKey.DAMAGE_DEALT, 412.6) == "413"

    def test_win_rate_percentage(self) -> None:
        assert format_metric(MetricKey.WIN_RATE, 0.125) == "12.5%"

    def test_integer_metric(self) -> None:
        assert format_metric(MetricKey.MATCHES_PLAYED, 12) == "12"


class TestCoercion:
    """String to enum resolution."""

    def test_metric_from_string(self) -> None:
        assert coerce_metric("kd_ratio") is MetricKey.KD_RATIO

    def test_metric_passthrough(self) -> None:
        assert coerce_metric(MetricKey.DEATHS) is MetricKey.DEATHS

    def test_metric_outside_allowed(self) -> None:
        with pytest.raises(InvalidMetricError):
            coerce_metric(MetricKey.DEATHS, RANKABLE_METRICS)

    def test_unknown_metric(self) -> None:
        with pytest.raises(InvalidMetricError):
            coerce_metric("assists")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("asc", Direction.ASCENDING),
            ("DESC", Direction.DESCENDING),
            ("ascending", Direction.ASCENDING),
            (Direction.DESCENDING, Direction.DESCENDING),
        ],
    )
    def test_direction(self, raw: object, expected: Direction) -> None:
        assert coerce_direction(raw) is expected

    def test_flipped(self) -> None:
        assert Direction.ASCENDING.flipped() is Direction.DESCENDING
        assert Direction.DESCENDING.flipped() is Direction.ASCENDING


# ======================================================================
# Context
# ======================================================================


class TestParseContext:
    """Boundary validation of period/mode/shard."""

    def test_defaults(self) -> None:
        assert parse_context() == StatsContext("last7d", "squad", "steam")

    def test_valid_values(self) -> None:
        ctx = parse_context("last90d", "solo", "kakao")
        assert ctx == StatsContext("last90d", "solo", "kakao")

    def test_case_insensitive(self) -> None:
        assert parse_context("LAST30D", " Duo ", "PSN").shard == "psn"

    @pytest.mark.parametrize(
        "kwargs, parameter",
        [
            ({"period": "7d"}, "period"),
            ({"mode": "all"}, "mode"),
            ({"shard": "pc"}, "shard"),
            ({"period": ""}, "period"),
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, str], parameter: str) -> None:
        with pytest.raises(InvalidContextError) as exc_info:
            parse_context(**kwargs)
        assert exc_info.value.parameter == parameter

    def test_cache_key(self) -> None:
        assert StatsContext("last7d", "duo", "xbox").cache_key() == (
            "last7d",
            "duo",
            "xbox",
        )
