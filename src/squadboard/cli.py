"""Command-line interface for the squadboard stats engine."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Callable

import click

from squadboard.engine.errors import StatsEngineError
from squadboard.engine.metrics import (
    AXIS_METRICS,
    METRIC_DEFINITIONS,
    RANKABLE_METRICS,
    Direction,
    MetricKey,
    format_metric,
)

logger = logging.getLogger(__name__)

_TABLE_METRICS = (
    MetricKey.KILLS,
    MetricKey.DAMAGE_DEALT,
    MetricKey.KD_RATIO,
    MetricKey.WIN_RATE,
    MetricKey.TOP1_COUNT,
    MetricKey.MATCHES_PLAYED,
)


@click.group()
@click.option("--log-level", default="INFO", help="Logging level.")
def cli(log_level: str) -> None:
    """squadboard -- compare and rank tracked players."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _request_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that fetches player stats."""
    options = [
        click.argument("player_ids", nargs=-1, required=True),
        click.option(
            "--config",
            "config_path",
            default=None,
            type=click.Path(exists=False),
            help="Path to engine config YAML.",
        ),
        click.option(
            "--snapshot",
            "snapshot_path",
            default=None,
            type=click.Path(exists=True, dir_okay=False),
            help="Read stats from a YAML/JSON snapshot instead of the API.",
        ),
        click.option("--api-base", default=None, help="Override the backend API URL."),
        click.option("--period", default=None, help="last7d, last30d or last90d."),
        click.option("--mode", default=None, help="solo, duo or squad."),
        click.option("--shard", default=None, help="steam, xbox, psn, kakao or stadia."),
        click.option(
            "--export",
            "export_formats",
            default=None,
            help="Comma-separated export formats (json,csv).",
        ),
        click.option("--output-dir", default=None, help="Directory for exports."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


# ------------------------------------------------------------------
# squadboard compare
# ------------------------------------------------------------------


@cli.command()
@_request_options
def compare(**kwargs: Any) -> None:
    """Show players side by side in selection order."""
    dataset, _, report = _execute(kwargs)

    _echo_header("Comparison", dataset.context)
    _echo_table_header(first_column="#")
    for index, entry in enumerate(dataset, start=1):
        _echo_row(str(index), entry.display_name, entry.metrics)
    _export(report, kwargs, "comparison")


# ------------------------------------------------------------------
# squadboard leaderboard
# ------------------------------------------------------------------


@cli.command()
@_request_options
@click.option(
    "--sort",
    "sort_key",
    default=MetricKey.KD_RATIO.value,
    type=click.Choice([m.value for m in RANKABLE_METRICS]),
    help="Metric to rank by.",
)
@click.option(
    "--order",
    default="desc",
    type=click.Choice(["asc", "desc"]),
    help="Sort direction.",
)
def leaderboard(sort_key: str, order: str, **kwargs: Any) -> None:
    """Rank players by a metric."""
    dataset, ranked, report = _execute(kwargs, sort_key=sort_key, order=order)

    label = METRIC_DEFINITIONS[MetricKey(sort_key)].label
    _echo_header(f"Leaderboard by {label} ({order})", dataset.context)
    _echo_table_header(first_column="Rank")
    for row in ranked or []:
        rank_label = f"#{row.rank}"
        if row.rank == 1:
            rank_label = click.style(rank_label, fg="yellow", bold=True)
        _echo_row(rank_label, row.entry.display_name, row.entry.metrics)
    _export(report, kwargs, "leaderboard")


# ------------------------------------------------------------------
# squadboard axes
# ------------------------------------------------------------------


@cli.command()
@_request_options
def axes(**kwargs: Any) -> None:
    """Show each player's 0-100 radar comparison axes."""
    dataset, _, report = _execute(kwargs, with_axes=True)

    _echo_header("Radar axes (0-100)", dataset.context)
    header = "".join(f"{key.value:>15}" for key in AXIS_METRICS)
    click.echo(f"  {'Player':<20}{header}")
    click.echo(f"  {'─' * (20 + 15 * len(AXIS_METRICS))}")
    for player in report["players"]:
        values = "".join(
            f"{player['axes'][key.value]:>15.1f}" for key in AXIS_METRICS
        )
        click.echo(f"  {player['name']:<20}{values}")
    _export(report, kwargs, "axes")


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _execute(
    options: dict[str, Any],
    sort_key: str | None = None,
    order: str | None = None,
    with_axes: bool = False,
) -> tuple[Any, Any, dict[str, Any]]:
    """Build the service from CLI options and run one request."""
    from squadboard.config.loader import load_config, merge_configs
    from squadboard.engine.ranker import rank
    from squadboard.exporters.report import build_report
    from squadboard.service import ComparisonService
    from squadboard.sources.http import HttpStatsSource
    from squadboard.sources.snapshot import SnapshotStatsSource

    config = load_config(options.get("config_path"))
    overrides: dict[str, Any] = {}
    if options.get("api_base"):
        overrides["source"] = {"api_base": options["api_base"]}
    if options.get("export_formats"):
        formats = [f.strip() for f in options["export_formats"].split(",") if f.strip()]
        overrides["export"] = {"export_formats": formats}
    if overrides:
        config = merge_configs(config, overrides)

    snapshot_path = options.get("snapshot_path") or config.source.snapshot_path

    async def _run() -> tuple[Any, Any, dict[str, Any]]:
        if snapshot_path:
            source: Any = SnapshotStatsSource.from_file(snapshot_path)
        else:
            source = HttpStatsSource(config.source)

        async with source:
            service = ComparisonService(source, config)
            context = service.resolve_context(
                options.get("period"), options.get("mode"), options.get("shard")
            )
            dataset = await service.compare(list(options["player_ids"]), context)

        ranked = None
        sort = None
        if sort_key is not None:
            direction = Direction.ASCENDING if order == "asc" else Direction.DESCENDING
            ranked = rank(dataset, sort_key, direction)
            sort = {"metric": sort_key, "direction": direction.value}
        radar = service.axes(dataset) if with_axes else None
        return dataset, ranked, build_report(dataset, ranked, radar, sort)

    try:
        dataset, ranked, report = asyncio.run(_run())
    except StatsEngineError as exc:
        logger.debug("Request failed: %s", exc)
        raise click.ClickException(exc.user_message) from exc
    except (OSError, ValueError) as exc:
        raise click.ClickException(f"Could not read snapshot: {exc}") from exc

    report["export"] = config.export.model_dump()
    return dataset, ranked, report


def _echo_header(title: str, context: Any) -> None:
    click.echo(click.style(f"=== {title} ===", fg="cyan", bold=True))
    click.echo(f"  Period: {context.period}  Mode: {context.mode}  Shard: {context.shard}")
    click.echo()


def _echo_table_header(first_column: str) -> None:
    columns = "".join(
        f"{METRIC_DEFINITIONS[key].label:>18}" for key in _TABLE_METRICS
    )
    click.echo(f"  {first_column:<6}{'Player':<20}{columns}")
    click.echo(f"  {'─' * (26 + 18 * len(_TABLE_METRICS))}")


def _echo_row(position: str, name: str, metrics: Any) -> None:
    values = "".join(
        f"{format_metric(key, metrics.value(key)):>18}" for key in _TABLE_METRICS
    )
    click.echo(f"  {position:<6}{name:<20}{values}")


def _export(report: dict[str, Any], options: dict[str, Any], stem: str) -> None:
    from squadboard.exporters import EXPORTERS

    export_settings = report.pop("export", {})
    if not options.get("export_formats"):
        return

    out_dir = options.get("output_dir") or export_settings.get("output_dir", ".")
    click.echo()
    for fmt in export_settings.get("export_formats", []):
        exporter_cls = EXPORTERS.get(fmt)
        if exporter_cls is None:
            click.echo(click.style(f"  Unknown export format: {fmt}", fg="red"))
            continue
        path = os.path.join(out_dir, f"{stem}.{fmt}")
        exporter_cls().export(report, path)
        click.echo(f"  Exported {fmt.upper()} to {path}")
