"""Reporting utilities for matnet."""

from .artifacts import write_manifest, write_predictions
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter
from .summary import write_summary

__all__ = [
    "write_manifest",
    "write_predictions",
    "write_summary",
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
]
