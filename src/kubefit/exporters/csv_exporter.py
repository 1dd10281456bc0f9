import csv
import io
import os
from typing import Any

import aiofiles

from ..models.resources import ClusterReport
from .base_exporter import BaseExporter

FIELDNAMES = ["node", "available_cpu", "available_memory", "available_pods", "can_schedule", "verdict"]


class CSVExporter(BaseExporter):
    """Writes the summary table, one row per node, schedulable nodes first."""

    DEFAULT_FILENAME = "kubefit-summary.csv"

    async def export(self, report: ClusterReport, path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        # csv.DictWriter needs a sync file object; render to memory first.
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in report.summary:
            writer.writerow({k: self._sanitize_cell(v) for k, v in row.model_dump().items()})

        async with aiofiles.open(out_path, "w", encoding="utf-8", newline="") as fh:
            await fh.write(output.getvalue())
        return out_path

    def _sanitize_cell(self, value: Any) -> Any:
        """
        Sanitize value to prevent CSV formula injection.
        Strings starting with =, +, - or @ are prefixed with a single quote.
        """
        if isinstance(value, str) and value.startswith(("=", "+", "-", "@")):
            return f"'{value}"
        return value
