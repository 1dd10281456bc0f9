"""File exporters for a finished cluster report: full JSON or CSV summary."""

from .base_exporter import BaseExporter
from .csv_exporter import CSVExporter
from .json_exporter import JSONExporter

__all__ = ["BaseExporter", "CSVExporter", "JSONExporter"]
