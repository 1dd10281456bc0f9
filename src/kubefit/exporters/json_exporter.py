import json
import os

import aiofiles

from ..models.resources import ClusterReport
from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    """Writes the whole report: per-node snapshots, verdicts, summary and taint legend."""

    DEFAULT_FILENAME = "kubefit-report.json"

    async def export(self, report: ClusterReport, path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        document = report.model_dump(mode="json")
        # Verdict labels are computed properties; keep them next to each verdict.
        for node, analysis in zip(document["nodes"], report.nodes):
            node["verdict"]["label"] = analysis.verdict.label
            node["snapshot"]["available"] = analysis.snapshot.available.model_dump()

        async with aiofiles.open(out_path, "w", encoding="utf-8") as fh:
            await fh.write(json.dumps(document, ensure_ascii=False, indent=2))
        return out_path
