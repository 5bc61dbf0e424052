"""Reporting utilities for PaintNet."""

from .artifacts import write_manifest
from .metrics import CsvSink, JsonlSink, StatusCapture
from .plots import PlotAdapter
from .render import blend, format_status, render_field, render_network, save_image
from .summary import write_summary

__all__ = [
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
    "StatusCapture",
    "blend",
    "format_status",
    "render_field",
    "render_network",
    "save_image",
    "write_manifest",
    "write_summary",
]
