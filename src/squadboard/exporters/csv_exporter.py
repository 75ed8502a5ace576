"""CSV exporter for comparison reports."""

from __future__ import annotations

import csv
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class CSVExporter:
    """Exports a comparison report as one CSV row per player."""

    def export(self, report: dict[str, Any], output_path: str) -> None:
        """Flatten the report's players into rows and write them.

        Parameters
        ----------
        report:
            A report as returned by :func:`~squadboard.exporters.report.build_report`.
        output_path:
            File path for the output CSV file.
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        rows = _report_rows(report)

        if not rows:
            logger.warning("No data to export to CSV")
            return

        fieldnames: list[str] = []
        for row in rows:
            for key in row:
                if key not in fieldnames:
                    fieldnames.append(key)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
            writer.writeheader()
            writer.writerows(rows)

        logger.info("CSV report exported to %s (%d rows)", output_path, len(rows))


def _report_rows(report: dict[str, Any], sep: str = ".") -> list[dict[str, str]]:
    """One flat row per player; nested ``stats``/``axes`` become dotted keys."""
    rows: list[dict[str, str]] = []
    for player in report.get("players", []):
        row: dict[str, str] = {}
        _flatten_recursive(player, "", sep, row)
        rows.append(row)
    return rows


def _flatten_recursive(
    data: Any,
    parent_key: str,
    sep: str,
    result: dict[str, str],
) -> None:
    """Recursively flatten a nested structure into a flat dict."""
    if isinstance(data, dict):
        for key, value in data.items():
            new_key = f"{parent_key}{sep}{key}" if parent_key else str(key)
            _flatten_recursive(value, new_key, sep, result)
    elif isinstance(data, (list, tuple)):
        for i, item in enumerate(data):
            new_key = f"{parent_key}{sep}{i}" if parent_key else str(i)
            _flatten_recursive(item, new_key, sep, result)
    elif data is None:
        result[parent_key] = ""
    else:
        result[parent_key] = str(data)
