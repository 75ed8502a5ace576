"""Tests for squadboard.engine.ranker -- leaderboard ordering."""

from __future__ import annotations

import pytest

from squadboard.engine.aggregator import aggregate
from squadboard.engine.errors import InvalidMetricError
from squadboard.engine.metrics import RANKABLE_METRICS, Direction, MetricKey
from squadboard.engine.models import ComparisonDataset, RawPlayerStats
from squadboard.engine.ranker import rank, toggle_direction


def _dataset(*players: tuple[str, dict[str, float]]) -> ComparisonDataset:
    return aggregate(
        [
            (pid, pid.upper(), RawPlayerStats(player_id=pid, **metrics))
            for pid, metrics in players
        ]
    )


def _ids(ranked: list) -> list[str]:
    return [row.entry.player_id for row in ranked]


def _groups(ranked: list, metric: str) -> list[tuple[float, list[str]]]:
    """Collapse a ranking into (value, member ids) tie groups."""
    groups: list[tuple[float, list[str]]] = []
    for row in ranked:
        value = row.entry.metrics.value(MetricKey(metric))
        if groups and groups[-1][0] == value:
            groups[-1][1].append(row.entry.player_id)
        else:
            groups.append((value, [row.entry.player_id]))
    return groups


# ======================================================================
# Fixtures
# ======================================================================


@pytest.fixture
def tied_dataset() -> ComparisonDataset:
    """Five players with two tie groups on kd_ratio."""
    return _dataset(
        ("a", {"kd_ratio": 1.0, "kills": 2.0}),
        ("b", {"kd_ratio": 2.0, "kills": 4.0}),
        ("c", {"kd_ratio": 1.0, "kills": 1.0}),
        ("d", {"kd_ratio": 2.0, "kills": 3.0}),
        ("e", {"kd_ratio": 0.5, "kills": 6.0}),
    )


# ======================================================================
# Basic ordering
# ======================================================================


class TestRankOrdering:
    """Tests for sort order and rank assignment."""

    def test_descending_kd(self) -> None:
        dataset = _dataset(("b", {"kd_ratio": 1.5}), ("a", {"kd_ratio": 3.0}))
        ranked = rank(dataset, "kd_ratio", "descending")
        assert [(row.rank, row.entry.player_id) for row in ranked] == [
            (1, "a"),
            (2, "b"),
        ]

    def test_ascending(self, tied_dataset: ComparisonDataset) -> None:
        ranked = rank(tied_dataset, MetricKey.KILLS, Direction.ASCENDING)
        assert _ids(ranked) == ["c", "a", "d", "b", "e"]

    def test_default_direction_is_descending(
        self, tied_dataset: ComparisonDataset
    ) -> None:
        assert _ids(rank(tied_dataset, "kills")) == ["e", "b", "d", "a", "c"]

    def test_ranks_are_contiguous(self, tied_dataset: ComparisonDataset) -> None:
        ranked = rank(tied_dataset, "kd_ratio", "descending")
        assert [row.rank for row in ranked] == [1, 2, 3, 4, 5]

    def test_short_direction_aliases(self, tied_dataset: ComparisonDataset) -> None:
        assert rank(tied_dataset, "kills", "asc") == rank(
            tied_dataset, "kills", Direction.ASCENDING
        )

    def test_empty_dataset(self) -> None:
        assert rank(aggregate([]), "kills", "descending") == []

    def test_does_not_reorder_dataset(self, tied_dataset: ComparisonDataset) -> None:
        rank(tied_dataset, "kills", "descending")
        assert tied_dataset.player_ids == ["a", "b", "c", "d", "e"]


# ======================================================================
# Ties
# ======================================================================


class TestRankTies:
    """Ties keep selection order and never share a rank."""

    def test_tied_pair_keeps_input_order(self) -> None:
        dataset = _dataset(("x", {"kd_ratio": 2.0}), ("y", {"kd_ratio": 2.0}))
        ranked = rank(dataset, "kd_ratio", "descending")
        assert [(row.rank, row.entry.player_id) for row in ranked] == [
            (1, "x"),
            (2, "y"),
        ]

    def test_ascending_ties_stable(self, tied_dataset: ComparisonDataset) -> None:
        ranked = rank(tied_dataset, "kd_ratio", "ascending")
        assert _ids(ranked) == ["e", "a", "c", "b", "d"]

    def test_descending_reverses_tie_groups(
        self, tied_dataset: ComparisonDataset
    ) -> None:
        descending = rank(tied_dataset, "kd_ratio", "descending")
        # The tie groups {b, d} and {a, c} keep their members in input order.
        assert _ids(descending) == ["b", "d", "a", "c", "e"]

    def test_descending_three_way(self) -> None:
        dataset = _dataset(
            ("a", {"kills": 3.0}), ("b", {"kills": 5.0}), ("c", {"kills": 5.0})
        )
        assert _ids(rank(dataset, "kills", "descending")) == ["b", "c", "a"]

    @pytest.mark.parametrize("metric", [m.value for m in RANKABLE_METRICS])
    def test_reverse_property_every_metric(
        self, tied_dataset: ComparisonDataset, metric: str
    ) -> None:
        ascending = _groups(rank(tied_dataset, metric, "ascending"), metric)
        descending = _groups(rank(tied_dataset, metric, "descending"), metric)
        assert descending == ascending[::-1]

    def test_idempotent(self, tied_dataset: ComparisonDataset) -> None:
        first = rank(tied_dataset, "kd_ratio", "descending")
        second = rank(tied_dataset, "kd_ratio", "descending")
        assert first == second


# ======================================================================
# Errors
# ======================================================================


class TestRankErrors:
    """Unsupported keys are rejected."""

    @pytest.mark.parametrize("metric", ["deaths", "survival_time", "top1_count", "elo"])
    def test_unsupported_metric(
        self, tied_dataset: ComparisonDataset, metric: str
    ) -> None:
        with pytest.raises(InvalidMetricError) as exc_info:
            rank(tied_dataset, metric, "descending")
        assert exc_info.value.metric_key == metric

    def test_unsupported_metric_on_empty_dataset(self) -> None:
        with pytest.raises(InvalidMetricError):
            rank(aggregate([]), "elo", "descending")

    def test_unknown_direction(self, tied_dataset: ComparisonDataset) -> None:
        with pytest.raises(InvalidMetricError):
            rank(tied_dataset, "kills", "sideways")


# ======================================================================
# toggle_direction
# ======================================================================


class TestToggleDirection:
    """Leaderboard column selection."""

    def test_same_column_flips(self) -> None:
        assert toggle_direction("kd_ratio", "descending", "kd_ratio") == (
            MetricKey.KD_RATIO,
            Direction.ASCENDING,
        )

    def test_flip_back(self) -> None:
        assert toggle_direction("kills", "ascending", "kills") == (
            MetricKey.KILLS,
            Direction.DESCENDING,
        )

    def test_new_column_resets_descending(self) -> None:
        assert toggle_direction("kd_ratio", "ascending", "win_rate") == (
            MetricKey.WIN_RATE,
            Direction.DESCENDING,
        )
