"""Report building and file exporters."""

from squadboard.exporters.csv_exporter import CSVExporter
from squadboard.exporters.json_exporter import JSONExporter
from squadboard.exporters.report import build_report

EXPORTERS = {
    "json": JSONExporter,
    "csv": CSVExporter,
}

__all__ = [
    "CSVExporter",
    "EXPORTERS",
    "JSONExporter",
    "build_report",
]
