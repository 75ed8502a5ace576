"""Build the serializable comparison report consumed by the exporters."""

from __future__ import annotations

from typing import Any

from squadboard.engine.models import ComparisonDataset, RankedEntry


def build_report(
    dataset: ComparisonDataset,
    ranked: list[RankedEntry] | None = None,
    axes: dict[str, dict[str, float]] | None = None,
    sort: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Assemble a JSON-friendly report.

    Players appear in leaderboard order when *ranked* is given, otherwise in
    selection order.  Radar axes are attached per player when supplied.
    """
    if ranked is not None:
        players = [row.as_dict() for row in ranked]
    else:
        players = [entry.as_dict() for entry in dataset]

    if axes is not None:
        for player in players:
            player["axes"] = dict(axes.get(player["player_id"], {}))

    report: dict[str, Any] = {
        "period": dataset.context.period,
        "mode": dataset.context.mode,
        "shard": dataset.context.shard,
        "num_players": len(dataset),
        "players": players,
    }
    if sort:
        report["sort"] = dict(sort)
    return report
