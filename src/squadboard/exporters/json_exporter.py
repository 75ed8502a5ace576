"""JSON exporter for comparison reports."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class JSONExporter:
    """Exports a comparison report to a pretty-printed JSON file."""

    def export(self, report: dict[str, Any], output_path: str) -> None:
        """Write *report* to *output_path*, creating parent directories."""
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, default=str, ensure_ascii=False)

        logger.info("JSON report exported to %s", output_path)
